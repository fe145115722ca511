# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`Codable` conformance rendering.

Structs and classes are keyed by field name and decoded through the
memberwise initializer. Enums are keyed by case name; the payload of a case
is stored as follows:

- no payload: `nil` under the case key,
- one value: the value itself under the case key,
- two or more values: a nested container keyed by a positional key enum
  (`_0`, `_1`, ...) generated next to `CodingKeys`.

Payload values are bound as `p_<label>`.

Decoding an enum requires exactly one case key and fails with
`DecodingError.dataCorrupted` otherwise.
"""

from __future__ import annotations

from typing import Sequence

from swiftgen.config import GenConfig

from .model import Field, Variant
from .naming import (
	PAYLOAD_PREFIX,
	SwiftWriter,
	access_prefix,
	construct,
	nested_keys_name,
	positional_key,
	positional_keys,
	switch_case,
	type_list,
	value_labels,
)


def render_struct_codable(
	type_name: str,
	fields: Sequence[Field],
	*,
	is_public: bool = False,
	is_class: bool = False,
	config: GenConfig = GenConfig(),
) -> str:
	pub = access_prefix(is_public)
	init_kw = "convenience init" if is_class else "init"
	w = SwiftWriter(config.indent_unit)
	w.line(0, f"extension {type_name}: Codable {{")
	if fields:
		w.line(1, "enum CodingKeys: String, CodingKey {")
		w.line(2, "case " + ", ".join(f.name for f in fields))
		w.line(1, "}")
	else:
		w.line(1, "enum CodingKeys: CodingKey {}")
	w.blank()

	w.line(1, f"{pub}func encode(to encoder: Encoder) throws {{")
	if fields:
		w.line(2, "var container = encoder.container(keyedBy: CodingKeys.self)")
		for f in fields:
			w.line(2, f"try container.encode({f.name}, forKey: .{f.name})")
	else:
		w.line(2, "_ = encoder.container(keyedBy: CodingKeys.self)")
	w.line(1, "}")
	w.blank()

	w.line(1, f"{pub}{init_kw}(from decoder: Decoder) throws {{")
	if fields:
		w.line(2, "let container = try decoder.container(keyedBy: CodingKeys.self)")
		w.line(2, "self.init(")
		for i, f in enumerate(fields):
			sep = "," if i + 1 < len(fields) else ""
			w.line(3, f"{f.name}: try container.decode({f.type}.self, forKey: .{f.name}){sep}")
		w.line(2, ")")
	else:
		w.line(2, "_ = try decoder.container(keyedBy: CodingKeys.self)")
		w.line(2, "self.init()")
	w.line(1, "}")
	w.line(0, "}")
	return w.render()


def render_enum_codable(
	type_name: str,
	variants: Sequence[Variant],
	*,
	is_public: bool = False,
	config: GenConfig = GenConfig(),
) -> str:
	pub = access_prefix(is_public)
	w = SwiftWriter(config.indent_unit)
	w.line(0, f"extension {type_name}: Codable {{")
	if variants:
		w.line(1, "enum CodingKeys: String, CodingKey {")
		w.line(2, "case " + ", ".join(v.name for v in variants))
		w.line(1, "}")
	else:
		w.line(1, "enum CodingKeys: CodingKey {}")
	for v in variants:
		if v.arity >= 2:
			w.blank()
			w.line(1, f"enum {nested_keys_name(v)}: CodingKey {{")
			w.line(2, f"case {positional_keys(v.arity)}")
			w.line(1, "}")
	w.blank()

	_render_enum_encode(w, variants, pub)
	w.blank()
	_render_enum_decode(w, type_name, variants, pub)
	w.line(0, "}")
	return w.render()


def _render_enum_encode(w: SwiftWriter, variants: Sequence[Variant], pub: str) -> None:
	w.line(1, f"{pub}func encode(to encoder: Encoder) throws {{")
	if variants:
		w.line(2, "var container = encoder.container(keyedBy: CodingKeys.self)")
	w.line(2, "switch self {")
	for v in variants:
		w.line(2, switch_case(v, PAYLOAD_PREFIX))
		if not v.has_payload:
			w.line(3, f"try container.encodeNil(forKey: .{v.name})")
		elif v.arity == 1:
			w.line(3, f"try container.encode({PAYLOAD_PREFIX}{v.payload[0].label}, forKey: .{v.name})")
		else:
			w.line(
				3,
				f"var nestedContainer = container.nestedContainer(keyedBy: {nested_keys_name(v)}.self, forKey: .{v.name})",
			)
			for i, slot in enumerate(v.payload):
				w.line(3, f"try nestedContainer.encode({PAYLOAD_PREFIX}{slot.label}, forKey: .{positional_key(i)})")
	w.line(2, "}")
	w.line(1, "}")


def _render_decoding_error(w: SwiftWriter, depth: int, type_name: str) -> None:
	w.line(depth, "throw DecodingError.dataCorrupted(")
	w.line(depth + 1, "DecodingError.Context(")
	w.line(depth + 2, "codingPath: container.codingPath,")
	w.line(depth + 2, f'debugDescription: "Unable to decode {type_name}: no valid case found."')
	w.line(depth + 1, ")")
	w.line(depth, ")")


def _render_enum_decode(w: SwiftWriter, type_name: str, variants: Sequence[Variant], pub: str) -> None:
	w.line(1, f"{pub}init(from decoder: Decoder) throws {{")
	w.line(2, "let container = try decoder.container(keyedBy: CodingKeys.self)")
	if not variants:
		# No key can ever be present.
		_render_decoding_error(w, 2, type_name)
		w.line(1, "}")
		return

	w.line(2, "guard container.allKeys.count == 1, let key = container.allKeys.first else {")
	_render_decoding_error(w, 3, type_name)
	w.line(2, "}")
	w.line(2, "switch key {")
	for v in variants:
		w.line(2, f"case .{v.name}:")
		if not v.has_payload:
			w.line(3, f"_ = try container.decodeNil(forKey: .{v.name})")
		elif v.arity == 1:
			slot = v.payload[0]
			w.line(3, f"let {PAYLOAD_PREFIX}{slot.label} = try container.decode({slot.type}.self, forKey: .{v.name})")
		else:
			w.line(
				3,
				f"let nestedContainer = try container.nestedContainer(keyedBy: {nested_keys_name(v)}.self, forKey: .{v.name})",
			)
			w.line(3, f"let ({value_labels(v, PAYLOAD_PREFIX)}): ({type_list(v)}) = (")
			for i, slot in enumerate(v.payload):
				sep = "," if i + 1 < v.arity else ""
				w.line(4, f"try nestedContainer.decode({slot.type}.self, forKey: .{positional_key(i)}){sep}")
			w.line(3, ")")
		w.line(3, f"self = {construct(v, PAYLOAD_PREFIX)}")
	w.line(2, "}")
	w.line(1, "}")


__all__ = ["render_enum_codable", "render_struct_codable"]
