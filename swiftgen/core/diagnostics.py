# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the parser, configuration and CLI.

Problems are reported as Diagnostic records rather than log lines; the CLI
decides how to render them (human text or JSON).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from .span import Span


@dataclass
class Diagnostic:
	"""Represents a tool diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic: "input", "config", "parser",
	# "generate" or "output".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	@property
	def is_error(self) -> bool:
		return self.severity == "error"

	def format_human(self) -> str:
		head = f"{self.span.format_prefix()}: {self.severity}: {self.message}"
		if self.code:
			head += f" [{self.code}]"
		lines = [head]
		for note in self.notes:
			lines.append(f"  note: {note}")
		return "\n".join(lines)


__all__ = ["Diagnostic"]
