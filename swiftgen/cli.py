# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command line driver.

Reads Swift source (a file, stdin, or inline text with `-I`), generates the
selected conformances for every top-level struct, class and enum, and writes
the blocks in declaration order.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from swiftgen.codegen import RenderOptions, generate_source, generation_warnings, render_units
from swiftgen.config import GenConfig, resolve_config
from swiftgen.core.diagnostics import Diagnostic
from swiftgen.core.span import Span
from swiftgen.errors import SwiftgenError
from swiftgen.parser import ast, parse_swift_file, parse_swift_source

STDIN_NAME = "<stdin>"
INLINE_NAME = "<inline>"


def _diag_to_json(diag: Diagnostic, source: str) -> dict:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase,
		"message": diag.message,
		"code": diag.code,
		"severity": diag.severity,
		"file": diag.span.file or source,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


def _build_arg_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="swiftgen",
		description="Generate Codable/Equatable/Hashable/StableHashable conformances for Swift declarations",
	)
	parser.add_argument("content", help="Path to a Swift source file, '-' for stdin, or Swift source text with -I")
	parser.add_argument("-I", dest="parse_directly", action="store_true", help="Parse CONTENT itself as Swift source")
	parser.add_argument("--codable", action="store_true", help="Emit a Codable conformance")
	parser.add_argument("--equatable", action="store_true", help="Emit an Equatable conformance")
	parser.add_argument("--hashable", action="store_true", help="Emit a Hashable conformance (implies Equatable)")
	parser.add_argument(
		"--stable-hashable",
		action="store_true",
		help="Emit a StableHashable conformance (implies Equatable)",
	)
	parser.add_argument(
		"--memberwise-init",
		action="store_true",
		help="Emit a memberwise initializer for structs and classes",
	)
	parser.add_argument("--all", action="store_true", help="Emit every conformance and the memberwise initializer")
	parser.add_argument("--config", type=Path, help="Path to configuration JSON (default: ./swiftgen.json if present)")
	parser.add_argument("-o", "--output", type=Path, help="Write generated code to this file instead of stdout")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit a JSON report (exit_code/diagnostics/output) on stdout",
	)
	return parser


def _options_from_args(args: argparse.Namespace, config: GenConfig) -> RenderOptions:
	if args.all:
		return RenderOptions(
			serialization=True,
			equality=True,
			hashing=True,
			stable_hashing=True,
			memberwise_init=True,
		)
	options = RenderOptions(
		serialization=args.codable,
		equality=args.equatable,
		hashing=args.hashable,
		stable_hashing=args.stable_hashable,
		memberwise_init=args.memberwise_init,
	)
	if options.is_empty:
		# Nothing selected on the command line: fall back to configured defaults.
		return RenderOptions.from_conformances(config.conformances)
	return options


def _load_source(args: argparse.Namespace) -> Tuple[Optional[ast.SourceFile], List[Diagnostic], str]:
	if args.parse_directly:
		source_file, diagnostics = parse_swift_source(args.content, INLINE_NAME)
		return source_file, diagnostics, INLINE_NAME
	if args.content == "-":
		source_file, diagnostics = parse_swift_source(sys.stdin.read(), STDIN_NAME)
		return source_file, diagnostics, STDIN_NAME
	source_file, diagnostics = parse_swift_file(Path(args.content))
	return source_file, diagnostics, args.content


def _report(args: argparse.Namespace, exit_code: int, diagnostics: List[Diagnostic], source: str, **extra) -> int:
	if args.json:
		payload = {"exit_code": exit_code, "diagnostics": [_diag_to_json(d, source) for d in diagnostics]}
		payload.update(extra)
		print(json.dumps(payload))
	else:
		for diag in diagnostics:
			print(diag.format_human(), file=sys.stderr)
	return exit_code


def main(argv: list[str] | None = None) -> int:
	"""
	Entry point for `swiftgen` and `python -m swiftgen`.

	Exit codes: 0 on success, 1 when input, configuration or parsing fails
	(diagnostics are printed), 2 for usage errors (argparse).

	With --json, stdout carries a single JSON object with the exit code, the
	diagnostics and, unless -o is given, the generated code under "output".
	"""
	args = _build_arg_parser().parse_args(argv)
	source_label = INLINE_NAME if args.parse_directly else args.content

	try:
		config = resolve_config(args.config)
	except SwiftgenError as err:
		diag = Diagnostic(
			message=err.message,
			code=err.reason_code,
			phase="config",
			span=Span(file=err.path),
			notes=[f"key: {err.key}"] if err.key else [],
		)
		return _report(args, 1, [diag], source_label)

	options = _options_from_args(args, config)
	source_file, diagnostics, source_label = _load_source(args)
	if source_file is None or any(d.is_error for d in diagnostics):
		return _report(args, 1, diagnostics, source_label)

	units = generate_source(source_file, options, config)
	if not units:
		diagnostics.append(
			Diagnostic(
				message="no struct, class or enum declarations to generate code for",
				phase="generate",
				severity="warning",
				span=Span(file=source_label),
			)
		)
	diagnostics.extend(generation_warnings(source_file, options))
	text = render_units(units)

	if args.output is not None:
		try:
			args.output.write_text(text, encoding="utf-8")
		except OSError as err:
			diagnostics.append(
				Diagnostic(
					message=f"cannot write output: {err.strerror or err}",
					code="E-OUTPUT",
					phase="output",
					span=Span(file=str(args.output)),
				)
			)
			return _report(args, 1, diagnostics, source_label)
		return _report(args, 0, diagnostics, source_label, output_path=str(args.output))

	if args.json:
		return _report(args, 0, diagnostics, source_label, output=text)
	sys.stdout.write(text)
	return _report(args, 0, diagnostics, source_label)


__all__ = ["main"]
