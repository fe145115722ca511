# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Derived text views over the extracted model, plus a small line writer.

All helpers are pure: they only format names, labels and type lists that
the renderers splice into generated Swift.
"""

from __future__ import annotations

from typing import List

from .model import Variant

# Prefixes for payload values bound in generated `switch` patterns. Every
# other local in the generated code is unprefixed, so bound names never clash.
LHS_PREFIX = "l_"
RHS_PREFIX = "r_"
PAYLOAD_PREFIX = "p_"


class SwiftWriter:
	"""Accumulates generated lines at explicit nesting depths."""

	def __init__(self, indent_unit: str = "    ") -> None:
		self.indent_unit = indent_unit
		self.lines: List[str] = []

	def line(self, depth: int, text: str) -> None:
		self.lines.append(f"{self.indent_unit * depth}{text}")

	def blank(self) -> None:
		self.lines.append("")

	def render(self) -> str:
		return "\n".join(self.lines)


def access_prefix(is_public: bool) -> str:
	return "public " if is_public else ""


def switch_case(variant: Variant, prefix: str = "") -> str:
	"""`case .name:` or `case .name(let a, let b):` binding every slot label."""
	if not variant.has_payload:
		return f"case .{variant.name}:"
	return f"case .{variant.name}({bound_labels(variant, prefix)}):"


def bound_labels(variant: Variant, prefix: str = "") -> str:
	"""`let a, let b` (or `let l_a, let l_b` with a prefix) for a case pattern."""
	return ", ".join(f"let {prefix}{slot.label}" for slot in variant.payload or ())


def value_labels(variant: Variant, prefix: str = "") -> str:
	return ", ".join(prefix + slot.label for slot in variant.payload or ())


def type_list(variant: Variant) -> str:
	return ", ".join(slot.type for slot in variant.payload or ())


def constructor_arguments(variant: Variant, prefix: str = "") -> str:
	"""Arguments rebuilding a case: `code: p_code` for source labels, bare `p_v0` otherwise."""
	parts = []
	for slot in variant.payload or ():
		value = prefix + slot.label
		parts.append(f"{slot.label}: {value}" if slot.explicit else value)
	return ", ".join(parts)


def construct(variant: Variant, prefix: str = "") -> str:
	if variant.payload is None:
		return f".{variant.name}"
	if not variant.payload:
		return f".{variant.name}()"
	return f".{variant.name}({constructor_arguments(variant, prefix)})"


def nested_keys_name(variant: Variant) -> str:
	"""Name of the positional key enum for a multi-slot case (`failure` -> `FailureCodingKeys`)."""
	base = variant.name.strip("`")
	return f"{base[:1].upper()}{base[1:]}CodingKeys"


def positional_key(index: int) -> str:
	return f"_{index}"


def positional_keys(count: int) -> str:
	return ", ".join(positional_key(i) for i in range(count))


def string_literal(text: str) -> str:
	escaped = text.replace("\\", "\\\\").replace('"', '\\"')
	return f'"{escaped}"'


def case_name_literal(variant: Variant) -> str:
	return string_literal(variant.name.strip("`"))


__all__ = [
	"LHS_PREFIX",
	"PAYLOAD_PREFIX",
	"RHS_PREFIX",
	"SwiftWriter",
	"access_prefix",
	"bound_labels",
	"case_name_literal",
	"construct",
	"constructor_arguments",
	"nested_keys_name",
	"positional_key",
	"positional_keys",
	"string_literal",
	"switch_case",
	"type_list",
	"value_labels",
]
