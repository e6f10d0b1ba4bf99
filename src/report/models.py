"""Record models for diagnostics, edits and per-file reports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from contract.diagnostics import REPORT_SCHEMA_VERSION, RULE_NAME, DiagnosticKind


class SourceRange(BaseModel):
    """Half-open byte range into the UTF-8 source, with 1-based positions."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    start_line: int
    start_col: int
    end_line: int
    end_col: int


class Diagnostic(BaseModel):
    """A single offense reported at a matched Timecop reference."""

    model_config = ConfigDict(frozen=True)

    range: SourceRange
    message: str
    kind: DiagnosticKind
    rule: str = RULE_NAME
    correctable: bool = False


class TextEdit(BaseModel):
    """Replacement of ``source[start:end]`` (byte offsets) with new text."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    replacement: str


class CheckResult(BaseModel):
    """Diagnostics and edits for one source unit, in pre-order."""

    diagnostics: list[Diagnostic] = Field(default_factory=list)
    edits: list[TextEdit] = Field(default_factory=list)


class DiagnosticRecord(BaseModel):
    """Schema for JSONL diagnostic records."""

    schema_version: int = Field(default=REPORT_SCHEMA_VERSION)
    path: str
    rule: str
    kind: DiagnosticKind
    message: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    correctable: bool


class FileReport(BaseModel):
    """Diagnostics found in a single file."""

    path: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    corrected: int = 0


__all__ = [
    "CheckResult",
    "Diagnostic",
    "DiagnosticRecord",
    "FileReport",
    "SourceRange",
    "TextEdit",
]
