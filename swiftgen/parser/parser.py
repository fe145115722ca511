# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Swift declaration parser: lark LALR grammar + post-lexer + tree builder.

The grammar models declaration shape only. Types, initializer expressions
and raw values are kept as source text, recovered from token positions, so
the builder never has to re-print a subtree.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from lark import Lark, Token, Tree

from .ast import (
	CaseDecl,
	CaseElement,
	CompilerControl,
	Decl,
	Located,
	Member,
	OtherDecl,
	OtherMember,
	PatternBinding,
	PayloadElement,
	PropertyBody,
	PropertyDecl,
	SourceFile,
	TypeDecl,
	TypeKind,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class SwiftPostLex:
	"""
	Token-stream fixups the basic lexer cannot express.

	1. Operator runs made only of `<`, `>`, `?` and `!` are split into single
	   LANGLE/RANGLE/QMARK/BANG tokens, so nested generics (`Array<Set<Int>>`)
	   and optional generics (`Array<Int?>?`) close correctly.
	2. A `{` directly followed by `willSet`/`didSet` becomes OBSERVER_LBRACE,
	   which lets the grammar tell property observers apart from a trailing
	   closure in an initializer expression (`var x = 0 { didSet { } }`).
	"""

	always_accept = ()

	SPLIT_TYPES = {"<": "LANGLE", ">": "RANGLE", "?": "QMARK", "!": "BANG"}
	OBSERVER_NAMES = ("willSet", "didSet")

	def process(self, stream: Iterable[Token]) -> Iterator[Token]:
		pending_brace: Token | None = None
		for token in self._split_operators(stream):
			if pending_brace is not None:
				if token.type == "NAME" and token.value in self.OBSERVER_NAMES:
					yield Token.new_borrow_pos("OBSERVER_LBRACE", pending_brace.value, pending_brace)
				else:
					yield pending_brace
				pending_brace = None
			if token.type == "LBRACE":
				pending_brace = token
				continue
			yield token
		if pending_brace is not None:
			yield pending_brace

	def _split_operators(self, stream: Iterable[Token]) -> Iterator[Token]:
		for token in stream:
			value = token.value
			if token.type != "OP" or len(value) < 2 or any(ch not in self.SPLIT_TYPES for ch in value):
				yield token
				continue
			for offset, ch in enumerate(value):
				# Operators never span lines, so only the column moves.
				yield Token(
					self.SPLIT_TYPES[ch],
					ch,
					start_pos=token.start_pos + offset,
					line=token.line,
					column=token.column + offset,
					end_line=token.line,
					end_column=token.column + offset + 1,
					end_pos=token.start_pos + offset + 1,
				)


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=SwiftPostLex(),
)


def parse_source(source: str, filename: Optional[str] = None) -> SourceFile:
	"""Parse Swift source text. Raises lark `UnexpectedInput` on syntax errors."""
	tree = _PARSER.parse(source)
	return _Builder(source).build_source_file(tree, filename)


_TYPE_DECL_KINDS = {
	"struct_decl": TypeKind.STRUCT,
	"class_decl": TypeKind.CLASS,
	"enum_decl": TypeKind.ENUM,
	"actor_decl": TypeKind.ACTOR,
	"protocol_decl": TypeKind.PROTOCOL,
	"extension_decl": TypeKind.EXTENSION,
}

_IMPORT_KINDS = {"STRUCT", "CLASS", "ENUM", "PROTOCOL", "FUNC", "VAR", "LET", "TYPEALIAS"}

_ACCESSOR_NAMES = ("get", "set")


class _Builder:
	"""Converts a lark parse tree into the declaration tree, slicing text from `source`."""

	def __init__(self, source: str) -> None:
		self.source = source

	def build_source_file(self, tree: Tree, filename: Optional[str]) -> SourceFile:
		decls: List[Decl] = []
		for child in tree.children:
			if isinstance(child, Tree):
				decls.append(self._build_decl(child))
		return SourceFile(decls=tuple(decls), filename=filename)

	def _build_decl(self, tree: Tree) -> Decl:
		kind = _name(tree)
		if kind in _TYPE_DECL_KINDS:
			return self._build_type_decl(tree, _TYPE_DECL_KINDS[kind])
		if kind == "compiler_control":
			return self._build_compiler_control(tree)
		keyword, name = self._describe(tree)
		return OtherDecl(loc=_loc(tree), keyword=keyword, name=name)

	def _build_member(self, tree: Tree) -> Member:
		kind = _name(tree)
		if kind in _TYPE_DECL_KINDS:
			return self._build_type_decl(tree, _TYPE_DECL_KINDS[kind])
		if kind == "var_decl":
			return self._build_property(tree)
		if kind == "case_decl":
			return self._build_case_decl(tree)
		if kind == "compiler_control":
			return self._build_compiler_control(tree)
		keyword, name = self._describe(tree)
		return OtherMember(loc=_loc(tree), keyword=keyword, name=name)

	# ------------------------------------------------------------ headers

	def _build_decl_head(self, tree: Tree) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
		attributes: List[str] = []
		modifiers: List[str] = []
		for child in tree.children:
			if _name(child) == "attribute":
				attributes.append(self._text(child))
			elif _name(child) == "modifier":
				word = child.children[0].value
				detail = _subtree(child, "modifier_detail")
				if detail is not None:
					word = f"{word}({_first_token(detail, 'NAME').value})"
				modifiers.append(word)
		return tuple(attributes), tuple(modifiers)

	def _build_type_decl(self, tree: Tree, kind: TypeKind) -> TypeDecl:
		attributes, modifiers = self._build_decl_head(tree.children[0])
		children = tree.children
		name_idx = next(i for i, c in enumerate(children) if isinstance(c, Token) and c.type == "NAME")
		name_parts = [children[name_idx].value]
		idx = name_idx + 1
		# `extension Outer.Inner` names a nested type.
		while (
			kind is TypeKind.EXTENSION
			and idx + 1 < len(children)
			and _is_token(children[idx], "DOT")
			and _is_token(children[idx + 1], "NAME")
		):
			name_parts.append(children[idx + 1].value)
			idx += 2

		inheritance = _subtree(tree, "inheritance")
		if inheritance is not None:
			inherited = tuple(self._type_text(t) for t in _subtrees(inheritance, "type"))
		else:
			inherited = self._inherited_from_atoms(children[idx:])

		block = _subtree(tree, "member_block")
		members = tuple(self._build_member(c) for c in block.children if isinstance(c, Tree))
		return TypeDecl(
			loc=_loc(tree),
			kind=kind,
			name=".".join(name_parts),
			members=members,
			modifiers=modifiers,
			inherited=inherited,
			attributes=attributes,
		)

	def _inherited_from_atoms(self, atoms: List[Tree | Token]) -> Tuple[str, ...]:
		"""Inheritance list of a protocol/extension header given as loose atoms (`: A, B<C, D> where ...`)."""
		if not atoms or not _is_token(atoms[0], "COLON"):
			return ()
		groups: List[List[Tree | Token]] = [[]]
		depth = 0
		for atom in atoms[1:]:
			if isinstance(atom, Token):
				if atom.type in ("WHERE", "LBRACE"):
					break
				if atom.type == "LANGLE":
					depth += 1
				elif atom.type == "RANGLE":
					depth -= 1
				elif atom.type == "COMMA" and depth == 0:
					groups.append([])
					continue
			elif _name(atom) == "member_block":
				break
			groups[-1].append(atom)
		out = []
		for group in groups:
			if group:
				out.append(_squash(self.source[_start_pos(group[0]) : _end_pos(group[-1])]))
		return tuple(out)

	# ------------------------------------------------------------ members

	def _build_property(self, tree: Tree) -> PropertyDecl:
		attributes, modifiers = self._build_decl_head(tree.children[0])
		if any(_is_token(c, "CLASS") for c in tree.children):
			modifiers = modifiers + ("class",)
		keyword = _subtree(tree, "binding_kw").children[0].value
		bindings: List[PatternBinding] = []
		body = PropertyBody.STORED
		for binding in _subtrees(tree, "pattern_binding"):
			pattern = binding.children[0]
			name = pattern.children[0].value if _name(pattern) == "name_pattern" else None
			type_text: Optional[str] = None
			initializer: Optional[str] = None
			for part in binding.children[1:]:
				part_kind = _name(part)
				if part_kind == "type_annotation":
					type_text = self._type_text(_subtree(part, "type"))
				elif part_kind == "initializer":
					initializer = self._text(_subtree(part, "expr"))
				elif part_kind == "accessor_block" and body is PropertyBody.STORED:
					body = _classify_accessor_block(part)
				elif part_kind == "observer_block" and body is PropertyBody.STORED:
					body = PropertyBody.WILLSET_DIDSET
			bindings.append(PatternBinding(name=name, type_text=type_text, initializer=initializer))
		return PropertyDecl(
			loc=_loc(tree),
			keyword=keyword,
			bindings=tuple(bindings),
			body=body,
			modifiers=modifiers,
		)

	def _build_case_decl(self, tree: Tree) -> CaseDecl:
		_, modifiers = self._build_decl_head(tree.children[0])
		elements = tuple(self._build_enum_case(c) for c in _subtrees(tree, "enum_case"))
		return CaseDecl(loc=_loc(tree), elements=elements, modifiers=modifiers)

	def _build_enum_case(self, tree: Tree) -> CaseElement:
		name = tree.children[0].value
		payload: Optional[Tuple[PayloadElement, ...]] = None
		raw_value: Optional[str] = None
		for part in tree.children[1:]:
			if _name(part) == "case_payload":
				payload = tuple(self._build_payload_element(e) for e in part.children if isinstance(e, Tree))
			elif _name(part) == "raw_value":
				raw_value = self._text(_subtree(part, "expr"))
		return CaseElement(name=name, payload=payload, raw_value=raw_value)

	def _build_payload_element(self, tree: Tree) -> PayloadElement:
		label: Optional[str] = None
		if _name(tree) == "labeled_slot" and tree.children[0].value != "_":
			# `_:` spells out an unlabeled slot.
			label = tree.children[0].value
		default_tree = _subtree(tree, "payload_default")
		default = self._text(_subtree(default_tree, "expr")) if default_tree is not None else None
		return PayloadElement(label=label, type_text=self._type_text(_subtree(tree, "type")), default=default)

	def _build_compiler_control(self, tree: Tree) -> CompilerControl:
		token = tree.children[0]
		return CompilerControl(loc=_loc_from_token(token), text=token.value.strip())

	def _describe(self, tree: Tree) -> Tuple[str, Optional[str]]:
		"""Keyword and (best-effort) name of a declaration that carries no stored state."""
		kind = _name(tree)
		tokens = [c for c in tree.children if isinstance(c, Token)]
		if kind == "var_decl":
			keyword = _subtree(tree, "binding_kw").children[0].value
			first = _subtrees(tree, "pattern_binding")[0].children[0]
			return keyword, first.children[0].value if _name(first) == "name_pattern" else None
		if kind == "case_decl":
			return "case", _subtrees(tree, "enum_case")[0].children[0].value
		if kind == "import_decl":
			rest = tokens[[t.type for t in tokens].index("IMPORT") + 1 :]
			if len(rest) > 1 and rest[0].type in _IMPORT_KINDS:
				rest = rest[1:]
			return "import", "".join(t.value for t in rest)
		if kind == "func_decl":
			func_idx = [t.type for t in tokens].index("FUNC")
			return "func", tokens[func_idx + 1].value
		if kind == "typealias_decl":
			return tokens[0].value, tokens[1].value
		# init/deinit/subscript: the keyword is the name.
		return tokens[0].value, None

	# ------------------------------------------------------------ text

	def _text(self, tree: Tree) -> str:
		return self.source[tree.meta.start_pos : tree.meta.end_pos].strip()

	def _type_text(self, tree: Tree) -> str:
		return _squash(self._text(tree))


def _classify_accessor_block(tree: Tree) -> PropertyBody:
	"""
	Tell `{ get set }`, `{ get { ... } set { ... } }` and plain computed
	bodies apart by looking at the block's leading tokens.
	"""
	inner = tree.children[1:-1]
	idx = 0
	while idx < len(inner) and (_is_token(inner[idx], "MUTATING") or _is_token(inner[idx], "NONMUTATING")):
		idx += 1
	if idx < len(inner) and _is_token(inner[idx], "NAME") and inner[idx].value in _ACCESSOR_NAMES:
		if any(isinstance(c, Tree) and _name(c) == "brace_group" for c in inner):
			return PropertyBody.GETTER_SETTER
		return PropertyBody.GETTER_SETTER_KEYWORDS
	return PropertyBody.CODE_BLOCK


def _squash(text: str) -> str:
	return " ".join(text.split())


def _subtree(tree: Tree, name: str) -> Optional[Tree]:
	for child in tree.children:
		if isinstance(child, Tree) and _name(child) == name:
			return child
	return None


def _subtrees(tree: Tree, name: str) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree) and _name(c) == name]


def _first_token(tree: Tree, ttype: str) -> Token:
	return next(c for c in tree.children if isinstance(c, Token) and c.type == ttype)


def _is_token(node: Tree | Token, ttype: str) -> bool:
	return isinstance(node, Token) and node.type == ttype


def _start_pos(node: Tree | Token) -> int:
	return node.start_pos if isinstance(node, Token) else node.meta.start_pos


def _end_pos(node: Tree | Token) -> int:
	return node.end_pos if isinstance(node, Token) else node.meta.end_pos


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=meta.line, column=meta.column)


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["SwiftPostLex", "parse_source"]
