# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration tree produced by the Swift declaration parser.

The tree is shallow: it records declaration *shape* (kinds,
names, access modifiers, stored-property patterns, enum cases) and keeps
types, initializer expressions and raw values as verbatim source text. No
type is ever resolved.

Member and declaration kinds form closed unions (`Member`, `Decl`) so
consumers can match them exhaustively with `isinstance`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class TypeKind(str, Enum):
	STRUCT = "struct"
	CLASS = "class"
	ENUM = "enum"
	ACTOR = "actor"
	PROTOCOL = "protocol"
	EXTENSION = "extension"


class PropertyBody(str, Enum):
	"""How a `let`/`var` declaration provides its value."""

	STORED = "stored"  # plain initializer list: `var x: Int = 0`, `let y: String`
	CODE_BLOCK = "code_block"  # `var x: Int { 42 }`
	GETTER_SETTER = "getter_setter"  # `var x: Int { get { ... } set { ... } }`
	GETTER_SETTER_KEYWORDS = "getter_setter_keywords"  # `var x: Int { get set }`
	WILLSET_DIDSET = "willset_didset"  # `var x = 0 { didSet { ... } }`


ACCESS_MODIFIERS = ("public", "open", "internal", "fileprivate", "private")


@dataclass(frozen=True)
class PatternBinding:
	"""One `pattern [: Type] [= expr]` entry of a property declaration."""

	name: Optional[str]  # None for tuple/destructuring patterns
	type_text: Optional[str] = None
	initializer: Optional[str] = None


@dataclass(frozen=True)
class PropertyDecl:
	loc: Located
	keyword: str  # "let" | "var"
	bindings: Tuple[PatternBinding, ...]
	body: PropertyBody = PropertyBody.STORED
	modifiers: Tuple[str, ...] = ()

	@property
	def is_type_level(self) -> bool:
		"""`static` and `class` properties belong to the type, not to instances."""
		return "static" in self.modifiers or "class" in self.modifiers


@dataclass(frozen=True)
class PayloadElement:
	label: Optional[str]
	type_text: str
	default: Optional[str] = None


@dataclass(frozen=True)
class CaseElement:
	name: str
	payload: Optional[Tuple[PayloadElement, ...]] = None  # None: no payload tuple
	raw_value: Optional[str] = None


@dataclass(frozen=True)
class CaseDecl:
	loc: Located
	elements: Tuple[CaseElement, ...]
	modifiers: Tuple[str, ...] = ()

	@property
	def carries_raw_values(self) -> bool:
		return any(e.raw_value is not None for e in self.elements)


@dataclass(frozen=True)
class OtherMember:
	"""Functions, initializers, subscripts, typealiases and other members without stored state."""

	loc: Located
	keyword: str
	name: Optional[str] = None


@dataclass(frozen=True)
class CompilerControl:
	loc: Located
	text: str


@dataclass(frozen=True)
class TypeDecl:
	loc: Located
	kind: TypeKind
	name: str
	members: Tuple["Member", ...] = ()
	modifiers: Tuple[str, ...] = ()
	inherited: Tuple[str, ...] = ()
	attributes: Tuple[str, ...] = ()

	@property
	def access(self) -> Optional[str]:
		for mod in self.modifiers:
			if mod in ACCESS_MODIFIERS:
				return mod
		return None

	@property
	def is_public(self) -> bool:
		return self.access in ("public", "open")


@dataclass(frozen=True)
class OtherDecl:
	"""A top-level declaration that is not a nominal type (functions, globals, imports, ...)."""

	loc: Located
	keyword: str
	name: Optional[str] = None


Member = Union[PropertyDecl, CaseDecl, TypeDecl, OtherMember, CompilerControl]
Decl = Union[TypeDecl, OtherDecl, CompilerControl]


@dataclass(frozen=True)
class SourceFile:
	decls: Tuple[Decl, ...] = ()
	filename: Optional[str] = None
	type_decls: Tuple[TypeDecl, ...] = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		object.__setattr__(self, "type_decls", tuple(d for d in self.decls if isinstance(d, TypeDecl)))


__all__ = [
	"ACCESS_MODIFIERS",
	"CaseDecl",
	"CaseElement",
	"CompilerControl",
	"Decl",
	"Located",
	"Member",
	"OtherDecl",
	"OtherMember",
	"PatternBinding",
	"PayloadElement",
	"PropertyBody",
	"PropertyDecl",
	"SourceFile",
	"TypeDecl",
	"TypeKind",
]
