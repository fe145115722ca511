# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Conformance generation: model extraction, renderers and the per-declaration driver."""

from .driver import (
	GeneratedUnit,
	RenderOptions,
	classify,
	generate_declaration,
	generate_source,
	generation_warnings,
	render_units,
)
from .model import DeclClass, Field, PayloadSlot, Variant, extract_fields, extract_variants

__all__ = [
	"DeclClass",
	"Field",
	"GeneratedUnit",
	"PayloadSlot",
	"RenderOptions",
	"Variant",
	"classify",
	"extract_fields",
	"extract_variants",
	"generate_declaration",
	"generate_source",
	"generation_warnings",
	"render_units",
]
