# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generator configuration (`swiftgen.json`).

Configuration is project-local by default (`./swiftgen.json`). A missing
default file means "use built-in defaults"; a missing file that was named
explicitly is an error.

Format (JSON, every key optional):
{
  "indent": 4,
  "unknown_type": "<unknown>",
  "stable_hash": {
    "protocol": "StableHashable",
    "property": "stableHash",
    "combine": "combineHashes"
  },
  "conformances": ["codable", "equatable"]
}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from swiftgen.errors import SwiftgenError

DEFAULT_CONFIG_NAME = "swiftgen.json"

CONFORMANCE_NAMES = ("codable", "equatable", "hashable", "stable-hashable", "memberwise-init")

_TOP_LEVEL_KEYS = {"indent", "unknown_type", "stable_hash", "conformances"}
_STABLE_HASH_KEYS = {"protocol", "property", "combine"}


@dataclass(frozen=True)
class GenConfig:
	indent: int = 4
	unknown_type: str = "<unknown>"
	stable_hash_protocol: str = "StableHashable"
	stable_hash_property: str = "stableHash"
	combine_function: str = "combineHashes"
	# Conformances emitted when the command line selects none.
	conformances: Tuple[str, ...] = ("codable", "equatable")

	@property
	def indent_unit(self) -> str:
		return " " * self.indent


def _invalid(message: str, *, path: Optional[Path], key: Optional[str] = None) -> SwiftgenError:
	return SwiftgenError(
		reason_code="config-invalid",
		message=message,
		path=str(path) if path is not None else None,
		key=key,
	)


def _identifier(obj: Mapping[str, Any], key: str, default: str, *, path: Optional[Path], label: str) -> str:
	value = obj.get(key, default)
	if not isinstance(value, str) or not value.strip():
		raise _invalid(f"{label} must be a non-empty string", path=path, key=label)
	return value


def config_from_mapping(obj: Any, *, path: Optional[Path] = None) -> GenConfig:
	"""Validate a decoded JSON object and build a `GenConfig`."""
	if not isinstance(obj, dict):
		raise _invalid("configuration must be a JSON object", path=path)
	unknown = sorted(set(obj) - _TOP_LEVEL_KEYS)
	if unknown:
		raise _invalid(f"unknown configuration key '{unknown[0]}'", path=path, key=unknown[0])

	defaults = GenConfig()

	indent = obj.get("indent", defaults.indent)
	# bool is an int subclass; `"indent": true` is a mistake, not 1.
	if isinstance(indent, bool) or not isinstance(indent, int) or not 1 <= indent <= 8:
		raise _invalid("indent must be an integer between 1 and 8", path=path, key="indent")

	unknown_type = _identifier(obj, "unknown_type", defaults.unknown_type, path=path, label="unknown_type")

	stable = obj.get("stable_hash", {})
	if not isinstance(stable, dict):
		raise _invalid("stable_hash must be a JSON object", path=path, key="stable_hash")
	unknown = sorted(set(stable) - _STABLE_HASH_KEYS)
	if unknown:
		raise _invalid(f"unknown configuration key 'stable_hash.{unknown[0]}'", path=path, key=f"stable_hash.{unknown[0]}")
	protocol = _identifier(stable, "protocol", defaults.stable_hash_protocol, path=path, label="stable_hash.protocol")
	prop = _identifier(stable, "property", defaults.stable_hash_property, path=path, label="stable_hash.property")
	combine = _identifier(stable, "combine", defaults.combine_function, path=path, label="stable_hash.combine")

	conformances = obj.get("conformances", list(defaults.conformances))
	if not isinstance(conformances, list) or not all(isinstance(c, str) for c in conformances):
		raise _invalid("conformances must be a list of strings", path=path, key="conformances")
	for name in conformances:
		if name not in CONFORMANCE_NAMES:
			raise _invalid(
				f"unknown conformance '{name}' (expected one of: {', '.join(CONFORMANCE_NAMES)})",
				path=path,
				key="conformances",
			)

	return GenConfig(
		indent=indent,
		unknown_type=unknown_type,
		stable_hash_protocol=protocol,
		stable_hash_property=prop,
		combine_function=combine,
		conformances=tuple(dict.fromkeys(conformances)),
	)


def load_config_json(path: Path) -> GenConfig:
	"""Load and validate a configuration file."""
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as err:
		raise SwiftgenError(
			reason_code="config-unreadable",
			message=f"cannot read configuration: {err.strerror or err}",
			path=str(path),
		) from err
	try:
		obj = json.loads(text)
	except json.JSONDecodeError as err:
		raise _invalid(f"malformed JSON at line {err.lineno} column {err.colno}: {err.msg}", path=path) from err
	return config_from_mapping(obj, path=path)


def resolve_config(explicit: Optional[Path] = None, *, cwd: Optional[Path] = None) -> GenConfig:
	"""
	Resolve the effective configuration.

	An explicit path must exist; otherwise `./swiftgen.json` is used when
	present and built-in defaults when not.
	"""
	if explicit is not None:
		return load_config_json(explicit)
	candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
	if candidate.is_file():
		return load_config_json(candidate)
	return GenConfig()


__all__ = [
	"CONFORMANCE_NAMES",
	"DEFAULT_CONFIG_NAME",
	"GenConfig",
	"config_from_mapping",
	"load_config_json",
	"resolve_config",
]
