"""Apply range-addressed text edits to source."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.ruby import parse_ruby_source
from rules.timecop import check_tree

if TYPE_CHECKING:
    from collections.abc import Sequence

    from report.models import TextEdit


class OverlappingEditsError(ValueError):
    """Raised when two edits in one batch touch the same bytes."""

    def __init__(self, first: TextEdit, second: TextEdit) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"Edit [{second.start}, {second.end}) overlaps "
            f"edit [{first.start}, {first.end})"
        )


def _sorted_checked(edits: Sequence[TextEdit], size: int) -> list[TextEdit]:
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))
    for edit in ordered:
        if edit.start < 0 or edit.end > size or edit.start > edit.end:
            msg = f"Edit [{edit.start}, {edit.end}) is outside the source"
            raise ValueError(msg)
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            raise OverlappingEditsError(previous, current)
    return ordered


def apply_edits_bytes(source_bytes: bytes, edits: Sequence[TextEdit]) -> bytes:
    """Splice edits into ``source_bytes``; all or nothing."""
    ordered = _sorted_checked(edits, len(source_bytes))

    out = bytearray(source_bytes)
    for edit in reversed(ordered):
        out[edit.start : edit.end] = edit.replacement.encode("utf-8")
    return bytes(out)


def apply_edits(source: str, edits: Sequence[TextEdit]) -> str:
    """Apply edits with byte offsets to a text string."""
    return apply_edits_bytes(source.encode("utf-8"), edits).decode("utf-8")


def autocorrect_source(source: str) -> str:
    """Check ``source`` and return it with every correctable offense fixed."""
    source_bytes = source.encode("utf-8")
    result = check_tree(parse_ruby_source(source_bytes), source_bytes)
    return apply_edits_bytes(source_bytes, result.edits).decode("utf-8")


__all__ = [
    "OverlappingEditsError",
    "apply_edits",
    "apply_edits_bytes",
    "autocorrect_source",
]
