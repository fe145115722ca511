# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Memberwise initializer rendering for structs and classes."""

from __future__ import annotations

from typing import Sequence

from swiftgen.config import GenConfig

from .model import Field
from .naming import SwiftWriter, access_prefix


def render_memberwise_init(fields: Sequence[Field], *, is_public: bool = False, config: GenConfig = GenConfig()) -> str:
	"""
	Render an initializer taking one parameter per field, in field order.

	The result is meant to be pasted into the type body, so unlike the
	conformance blocks it is not wrapped in an extension. Fields with an
	initializer expression keep it as the parameter's default value.
	"""
	pub = access_prefix(is_public)
	w = SwiftWriter(config.indent_unit)
	w.line(0, "/// Memberwise initializer.")
	if not fields:
		w.line(0, f"{pub}init() {{}}")
		return w.render()
	w.line(0, f"{pub}init(")
	for i, f in enumerate(fields):
		default = f" = {f.default}" if f.default is not None else ""
		sep = "," if i + 1 < len(fields) else ""
		w.line(1, f"{f.name}: {f.type}{default}{sep}")
	w.line(0, ") {")
	for f in fields:
		w.line(1, f"self.{f.name} = {f.name}")
	w.line(0, "}")
	return w.render()


__all__ = ["render_memberwise_init"]
