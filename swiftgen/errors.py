# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SwiftgenError(Exception):
	"""
	A structured, serializable error for swiftgen tooling.

	Raised for problems outside Swift source syntax (configuration files,
	unreadable inputs). The CLI converts it into a diagnostic.
	"""

	reason_code: str
	message: str
	path: str | None = None
	key: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"path": self.path,
			"key": self.key,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.key:
			parts.append(f"key={self.key}")
		if self.path:
			parts.append(f"path={self.path}")
		return " ".join(parts)
