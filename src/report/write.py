"""Text and JSONL rendering of diagnostic reports."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import orjson

from report.models import DiagnosticRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from report.models import Diagnostic, FileReport


def to_record(path: str, diagnostic: Diagnostic) -> DiagnosticRecord:
    span = diagnostic.range
    return DiagnosticRecord(
        path=path,
        rule=diagnostic.rule,
        kind=diagnostic.kind,
        message=diagnostic.message,
        start_line=span.start_line,
        start_col=span.start_col,
        end_line=span.end_line,
        end_col=span.end_col,
        correctable=diagnostic.correctable,
    )


def format_text(path: str, diagnostic: Diagnostic) -> str:
    """Render ``path:line:col: Rule: message``."""
    span = diagnostic.range
    prefix = "[Correctable] " if diagnostic.correctable else ""
    return (
        f"{path}:{span.start_line}:{span.start_col}: "
        f"{prefix}{diagnostic.rule}: {diagnostic.message}"
    )


def write_text(out: IO[str], reports: Iterable[FileReport]) -> int:
    """Write text lines for every diagnostic; return the number written."""
    count = 0
    for report in reports:
        for diagnostic in report.diagnostics:
            out.write(format_text(report.path, diagnostic) + "\n")
            count += 1
    return count


def write_jsonl(out: IO[bytes], reports: Iterable[FileReport]) -> int:
    """Write one sorted-key JSON object per diagnostic; return the count."""
    count = 0
    for report in reports:
        for diagnostic in report.diagnostics:
            payload = to_record(report.path, diagnostic).model_dump(mode="json")
            out.write(orjson.dumps(payload, option=orjson.OPT_SORT_KEYS))
            out.write(b"\n")
            count += 1
    return count


__all__ = ["format_text", "to_record", "write_jsonl", "write_text"]
