# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Swift declaration parser.

Parses Swift source into the shallow declaration tree in `swiftgen.parser.ast`
and reports syntax errors as parser-phase diagnostics instead of raising.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from swiftgen.core.diagnostics import Diagnostic
from swiftgen.core.span import Span

from . import ast
from .parser import parse_source as _parse_source


def _describe_error(err: UnexpectedInput) -> str:
	if isinstance(err, UnexpectedToken):
		if err.token.type == "$END":
			return "unexpected end of input"
		return f"unexpected token '{err.token.value}'"
	if isinstance(err, UnexpectedCharacters):
		return f"unexpected character '{err.char}'"
	if isinstance(err, UnexpectedEOF):
		return "unexpected end of input"
	return "syntax error"


def _syntax_diagnostic(err: UnexpectedInput, source: str, filename: Optional[str]) -> Diagnostic:
	span = Span.from_loc(err, file=filename)
	notes: List[str] = []
	if getattr(err, "pos_in_stream", None) is not None:
		context = err.get_context(source).rstrip("\n")
		if context:
			notes.append(context)
	return Diagnostic(
		message=_describe_error(err),
		code="E-SYNTAX",
		phase="parser",
		severity="error",
		span=span,
		notes=notes,
	)


def parse_swift_source(source: str, filename: Optional[str] = None) -> Tuple[Optional[ast.SourceFile], List[Diagnostic]]:
	"""
	Parse Swift source text.

	Returns `(source_file, diagnostics)`; `source_file` is None when the text
	has a syntax error.
	"""
	try:
		return _parse_source(source, filename), []
	except UnexpectedInput as err:
		return None, [_syntax_diagnostic(err, source, filename)]


def parse_swift_file(path: Path) -> Tuple[Optional[ast.SourceFile], List[Diagnostic]]:
	"""Read and parse a Swift file; an unreadable file is an input-phase diagnostic."""
	try:
		source = Path(path).read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as err:
		message = err.strerror if isinstance(err, OSError) and err.strerror else str(err)
		return None, [
			Diagnostic(
				message=f"cannot read input file: {message}",
				code="E-INPUT",
				phase="input",
				span=Span(file=str(path)),
			)
		]
	return parse_swift_source(source, str(path))


__all__ = ["ast", "parse_swift_file", "parse_swift_source"]
