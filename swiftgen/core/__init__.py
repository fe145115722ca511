# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared records used across the parser, the generators and the CLI."""

from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
