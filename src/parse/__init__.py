"""Parsing utilities for timecop-check."""

from parse.ruby import SourceParseError, iter_preorder, node_text, parse_ruby_source

__all__ = [
    "SourceParseError",
    "iter_preorder",
    "node_text",
    "parse_ruby_source",
]
