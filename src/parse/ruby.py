"""Tree-sitter parsing for Ruby source files."""

from __future__ import annotations

from tree_sitter import Language, Node, Parser, Tree
from tree_sitter_ruby import language as get_ruby_language

_PARSER: Parser | None = None


class SourceParseError(Exception):
    """Raised when Ruby source contains syntax errors."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Ruby language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_ruby_language())
        _PARSER = Parser(lang)

    return _PARSER


def _first_error_line(node: Node) -> int | None:
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1
    for child in node.children:
        if child.has_error:
            return _first_error_line(child)
    return None


def parse_ruby_source(source_bytes: bytes, *, strict: bool = False) -> Tree:
    """Parse Ruby source into a Tree-sitter tree.

    With ``strict`` set, a tree containing ERROR or MISSING nodes raises
    SourceParseError instead of being returned.
    """
    tree = _get_parser().parse(source_bytes)
    if strict and tree.root_node.has_error:
        msg = "Failed to parse Ruby source"
        raise SourceParseError(msg, line=_first_error_line(tree.root_node))
    return tree


def node_text(source_bytes: bytes, node: Node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode(
        "utf8", errors="ignore"
    )


def iter_preorder(node: Node):
    """Yield ``node`` and its descendants depth-first, parents first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


__all__ = [
    "SourceParseError",
    "iter_preorder",
    "node_text",
    "parse_ruby_source",
]
