# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
swiftgen: conformance boilerplate generator for Swift declarations.

Parses top-level struct, class and enum declarations and renders Codable,
Equatable, Hashable and StableHashable conformances (plus memberwise
initializers) as Swift source text.
"""

__version__ = "0.1.0"
