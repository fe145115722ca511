# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Equatable / Hashable / stable-hash conformance rendering.

The three conformances are rendered as consecutive extensions in one block.
`Equatable` is always part of the block because both hashing flavours rely
on it; enum blocks additionally define `caseName`, the discriminant every
comparison and hash starts from.
"""

from __future__ import annotations

from typing import List, Sequence

from swiftgen.config import GenConfig

from .model import Field, Variant
from .naming import (
	LHS_PREFIX,
	PAYLOAD_PREFIX,
	RHS_PREFIX,
	SwiftWriter,
	access_prefix,
	bound_labels,
	case_name_literal,
	switch_case,
)

CASE_NAME_PROPERTY = "caseName"


def render_struct_hashable(
	type_name: str,
	fields: Sequence[Field],
	*,
	is_public: bool = False,
	hashable: bool = False,
	stable_hashable: bool = False,
	config: GenConfig = GenConfig(),
) -> str:
	pub = access_prefix(is_public)
	parts: List[str] = []

	w = SwiftWriter(config.indent_unit)
	w.line(0, f"extension {type_name}: Equatable {{")
	w.line(1, f"{pub}static func ==(lhs: {type_name}, rhs: {type_name}) -> Bool {{")
	if fields:
		w.line(2, f"return lhs.{fields[0].name} == rhs.{fields[0].name}")
		for f in fields[1:]:
			w.line(3, f"&& lhs.{f.name} == rhs.{f.name}")
	else:
		w.line(2, "return true")
	w.line(1, "}")
	w.line(0, "}")
	parts.append(w.render())

	if hashable:
		w = SwiftWriter(config.indent_unit)
		w.line(0, f"extension {type_name}: Hashable {{")
		w.line(1, f"{pub}func hash(into hasher: inout Hasher) {{")
		for f in fields:
			w.line(2, f"hasher.combine({f.name})")
		w.line(1, "}")
		w.line(0, "}")
		parts.append(w.render())

	if stable_hashable:
		w = SwiftWriter(config.indent_unit)
		_open_stable_hash(w, type_name, pub, config)
		for f in fields:
			w.line(2, _combine_stable(config, f.name))
		_close_stable_hash(w)
		parts.append(w.render())

	return "\n\n".join(parts)


def render_enum_hashable(
	type_name: str,
	variants: Sequence[Variant],
	*,
	is_public: bool = False,
	hashable: bool = False,
	stable_hashable: bool = False,
	config: GenConfig = GenConfig(),
) -> str:
	pub = access_prefix(is_public)
	parts: List[str] = []

	w = SwiftWriter(config.indent_unit)
	w.line(0, f"extension {type_name}: Equatable {{")
	w.line(1, f"var {CASE_NAME_PROPERTY}: String {{")
	w.line(2, "switch self {")
	for v in variants:
		w.line(2, f"case .{v.name}: return {case_name_literal(v)}")
	w.line(2, "}")
	w.line(1, "}")
	w.blank()
	w.line(1, f"{pub}static func ==(lhs: {type_name}, rhs: {type_name}) -> Bool {{")
	w.line(2, f"guard lhs.{CASE_NAME_PROPERTY} == rhs.{CASE_NAME_PROPERTY} else {{")
	w.line(3, "return false")
	w.line(2, "}")

	def _compare(v: Variant) -> None:
		w.line(3, f"guard case .{v.name}({bound_labels(v, RHS_PREFIX)}) = rhs else {{ return false }}")
		for slot in v.payload:
			w.line(3, f"guard {LHS_PREFIX}{slot.label} == {RHS_PREFIX}{slot.label} else {{ return false }}")

	_render_payload_switch(w, "lhs", variants, _compare, LHS_PREFIX)
	w.blank()
	w.line(2, "return true")
	w.line(1, "}")
	w.line(0, "}")
	parts.append(w.render())

	if hashable:
		w = SwiftWriter(config.indent_unit)
		w.line(0, f"extension {type_name}: Hashable {{")
		w.line(1, f"{pub}func hash(into hasher: inout Hasher) {{")
		w.line(2, f"hasher.combine({CASE_NAME_PROPERTY})")

		def _combine(v: Variant) -> None:
			for slot in v.payload:
				w.line(3, f"hasher.combine({PAYLOAD_PREFIX}{slot.label})")

		_render_payload_switch(w, "self", variants, _combine, PAYLOAD_PREFIX)
		w.line(1, "}")
		w.line(0, "}")
		parts.append(w.render())

	if stable_hashable:
		w = SwiftWriter(config.indent_unit)
		_open_stable_hash(w, type_name, pub, config)
		w.line(2, _combine_stable(config, CASE_NAME_PROPERTY))

		def _combine_stable_slots(v: Variant) -> None:
			for slot in v.payload:
				w.line(3, _combine_stable(config, PAYLOAD_PREFIX + slot.label))

		_render_payload_switch(w, "self", variants, _combine_stable_slots, PAYLOAD_PREFIX)
		_close_stable_hash(w)
		parts.append(w.render())

	return "\n\n".join(parts)


def _render_payload_switch(
	w: SwiftWriter, subject: str, variants: Sequence[Variant], body, prefix: str
) -> None:
	"""
	`switch` over the payload-carrying cases only. Omitted entirely when no
	case carries a payload; ends in `default: break` when some case does not.
	"""
	with_payload = [v for v in variants if v.has_payload]
	if not with_payload:
		return
	w.line(2, f"switch {subject} {{")
	for v in with_payload:
		w.line(2, switch_case(v, prefix))
		body(v)
	if len(with_payload) < len(variants):
		w.line(2, "default:")
		w.line(3, "break")
	w.line(2, "}")


def _open_stable_hash(w: SwiftWriter, type_name: str, pub: str, config: GenConfig) -> None:
	w.line(0, f"extension {type_name}: {config.stable_hash_protocol} {{")
	w.line(1, f"{pub}var {config.stable_hash_property}: Int {{")
	w.line(2, "var hashValue = 0")


def _close_stable_hash(w: SwiftWriter) -> None:
	w.blank()
	w.line(2, "return hashValue")
	w.line(1, "}")
	w.line(0, "}")


def _combine_stable(config: GenConfig, value: str) -> str:
	return f"{config.combine_function}(&hashValue, {value}.{config.stable_hash_property})"


__all__ = ["CASE_NAME_PROPERTY", "render_enum_hashable", "render_struct_hashable"]
