"""Report models and writers for timecop-check."""

from report.models import (
    CheckResult,
    Diagnostic,
    DiagnosticRecord,
    FileReport,
    SourceRange,
    TextEdit,
)
from report.write import format_text, to_record, write_jsonl, write_text

__all__ = [
    "CheckResult",
    "Diagnostic",
    "DiagnosticRecord",
    "FileReport",
    "SourceRange",
    "TextEdit",
    "format_text",
    "to_record",
    "write_jsonl",
    "write_text",
]
