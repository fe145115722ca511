# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration classification and generation driver.

Each top-level declaration is handled on its own: classify, extract the
model, render the requested blocks. Nothing is shared between declarations,
and units come back in declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from swiftgen.config import GenConfig
from swiftgen.core.diagnostics import Diagnostic
from swiftgen.core.span import Span
from swiftgen.parser.ast import Decl, Located, SourceFile, TypeDecl, TypeKind

from .codable import render_enum_codable, render_struct_codable
from .hashable import render_enum_hashable, render_struct_hashable
from .memberwise import render_memberwise_init
from .model import DeclClass, extract_fields, extract_variants


@dataclass(frozen=True)
class RenderOptions:
	serialization: bool = False
	equality: bool = False
	hashing: bool = False
	stable_hashing: bool = False
	memberwise_init: bool = False

	@property
	def wants_equality(self) -> bool:
		"""Hashing builds on equality, so either hash flag implies `Equatable`."""
		return self.equality or self.hashing or self.stable_hashing

	@property
	def is_empty(self) -> bool:
		return not (self.serialization or self.wants_equality or self.memberwise_init)

	@classmethod
	def from_conformances(cls, names: Iterable[str]) -> "RenderOptions":
		"""Build options from conformance names as used in config files (`codable`, `stable-hashable`, ...)."""
		selected = set(names)
		return cls(
			serialization="codable" in selected,
			equality="equatable" in selected,
			hashing="hashable" in selected,
			stable_hashing="stable-hashable" in selected,
			memberwise_init="memberwise-init" in selected,
		)


@dataclass(frozen=True)
class GeneratedUnit:
	name: str
	decl_class: DeclClass
	blocks: Tuple[str, ...]
	loc: Optional[Located] = None


def classify(decl: Decl) -> DeclClass:
	if isinstance(decl, TypeDecl):
		if decl.kind in (TypeKind.STRUCT, TypeKind.CLASS):
			return DeclClass.PRODUCT
		if decl.kind is TypeKind.ENUM:
			return DeclClass.SUM
	return DeclClass.OTHER


def generate_declaration(decl: Decl, options: RenderOptions, config: GenConfig = GenConfig()) -> List[str]:
	"""Render the requested blocks for one declaration: memberwise init, `Codable`, then equality/hashing."""
	decl_class = classify(decl)
	blocks: List[str] = []
	if decl_class is DeclClass.PRODUCT:
		fields = extract_fields(decl, config.unknown_type)
		if options.memberwise_init:
			blocks.append(render_memberwise_init(fields, is_public=decl.is_public, config=config))
		if options.serialization:
			blocks.append(
				render_struct_codable(
					decl.name,
					fields,
					is_public=decl.is_public,
					is_class=decl.kind is TypeKind.CLASS,
					config=config,
				)
			)
		if options.wants_equality:
			blocks.append(
				render_struct_hashable(
					decl.name,
					fields,
					is_public=decl.is_public,
					hashable=options.hashing,
					stable_hashable=options.stable_hashing,
					config=config,
				)
			)
	elif decl_class is DeclClass.SUM:
		variants = extract_variants(decl)
		if options.serialization:
			blocks.append(render_enum_codable(decl.name, variants, is_public=decl.is_public, config=config))
		if options.wants_equality:
			blocks.append(
				render_enum_hashable(
					decl.name,
					variants,
					is_public=decl.is_public,
					hashable=options.hashing,
					stable_hashable=options.stable_hashing,
					config=config,
				)
			)
	return blocks


def generate_source(source: SourceFile, options: RenderOptions, config: GenConfig = GenConfig()) -> List[GeneratedUnit]:
	units: List[GeneratedUnit] = []
	for decl in source.decls:
		blocks = generate_declaration(decl, options, config)
		if not blocks:
			continue
		units.append(GeneratedUnit(name=decl.name, decl_class=classify(decl), blocks=tuple(blocks), loc=decl.loc))
	return units


def generation_warnings(source: SourceFile, options: RenderOptions) -> List[Diagnostic]:
	"""
	Warnings for generated code that Swift rejects on its own terms.

	A non-final class only conforms to `Decodable` through a `required
	init(from:)` declared in the class body; the extension initializer emitted
	here satisfies the protocol for `final` classes only.
	"""
	diagnostics: List[Diagnostic] = []
	if not options.serialization:
		return diagnostics
	for decl in source.type_decls:
		if decl.kind is TypeKind.CLASS and "final" not in decl.modifiers:
			diagnostics.append(
				Diagnostic(
					message=f"class '{decl.name}' is not final; its generated Codable conformance needs a final class",
					code="W-NONFINAL-CLASS",
					phase="generate",
					severity="warning",
					span=Span.from_loc(decl.loc, file=source.filename),
					notes=["declare it `final class`, or write `required init(from:)` in the class body"],
				)
			)
	return diagnostics


def render_units(units: Sequence[GeneratedUnit]) -> str:
	"""Join every block of every unit with a blank line; empty string when nothing was generated."""
	blocks = [block for unit in units for block in unit.blocks]
	if not blocks:
		return ""
	return "\n\n".join(blocks) + "\n"


__all__ = [
	"GeneratedUnit",
	"RenderOptions",
	"classify",
	"generate_declaration",
	"generation_warnings",
	"generate_source",
	"render_units",
]
