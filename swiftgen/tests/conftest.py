# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from swiftgen.parser import parse_swift_source


@pytest.fixture
def parse_ok():
	"""Parse Swift source that is expected to be free of syntax errors."""

	def _parse(source: str):
		source_file, diagnostics = parse_swift_source(source, "test.swift")
		assert diagnostics == []
		assert source_file is not None
		return source_file

	return _parse
