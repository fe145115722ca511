# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Field/variant extraction.

Turns a type declaration's member list into the normalized model the
renderers consume: ordered `Field`s for structs/classes, ordered `Variant`s
for enums. Extraction is best-effort: members that hold no stored state
(computed or observed properties, functions, nested types, ...) are skipped,
never reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from swiftgen.parser.ast import (
	CaseDecl,
	PropertyBody,
	PropertyDecl,
	TypeDecl,
)

UNKNOWN_TYPE = "<unknown>"


class DeclClass(str, Enum):
	PRODUCT = "product"
	SUM = "sum"
	OTHER = "other"


@dataclass(frozen=True)
class Field:
	name: str
	type: str
	default: Optional[str] = None


@dataclass(frozen=True)
class PayloadSlot:
	label: str
	type: str
	# False when `label` was synthesized (`v0`, `v1`, ...); such slots are
	# passed positionally when the case is reconstructed.
	explicit: bool = True


@dataclass(frozen=True)
class Variant:
	name: str
	payload: Optional[Tuple[PayloadSlot, ...]] = None

	@property
	def has_payload(self) -> bool:
		"""An empty payload tuple (`case a()`) counts as no payload."""
		return bool(self.payload)

	@property
	def arity(self) -> int:
		return len(self.payload) if self.payload else 0


def positional_label(index: int) -> str:
	return f"v{index}"


def extract_fields(decl: TypeDecl, unknown_type: str = UNKNOWN_TYPE) -> List[Field]:
	fields: List[Field] = []
	for member in decl.members:
		if not isinstance(member, PropertyDecl):
			continue
		if member.body is not PropertyBody.STORED or member.is_type_level:
			continue
		if not member.bindings:
			continue
		first = member.bindings[0]
		if first.name is None:
			# Tuple patterns (`let (a, b) = ...`) bind no single field.
			continue
		fields.append(
			Field(
				name=first.name,
				type=first.type_text if first.type_text is not None else unknown_type,
				default=first.initializer,
			)
		)
	return fields


def extract_variants(decl: TypeDecl) -> List[Variant]:
	variants: List[Variant] = []
	for member in decl.members:
		# Only case declarations carry variants.
		if isinstance(member, CaseDecl):
			for element in member.elements:
				if element.raw_value is not None or element.payload is None:
					variants.append(Variant(name=element.name))
					continue
				slots = tuple(
					PayloadSlot(
						label=elem.label if elem.label is not None else positional_label(i),
						type=elem.type_text,
						explicit=elem.label is not None,
					)
					for i, elem in enumerate(element.payload)
				)
				variants.append(Variant(name=element.name, payload=slots))
	return variants


__all__ = [
	"DeclClass",
	"Field",
	"PayloadSlot",
	"UNKNOWN_TYPE",
	"Variant",
	"extract_fields",
	"extract_variants",
	"positional_label",
]
