"""Stable diagnostic contract surface for timecop-check.

Treat these exports as the authoritative boundary between the rule engine
and anything that consumes its output.
"""

from contract.diagnostics import (
    FREEZE_TIME,
    MESSAGES,
    REPLACEMENTS,
    REPORT_SCHEMA_VERSION,
    RULE_NAME,
    TARGET_CONSTANT,
    TRAVEL_BACK,
    DiagnosticKind,
    RewriteKind,
    message_for,
)


def __getattr__(name: str) -> object:
    if name in {"Diagnostic", "SourceRange", "TextEdit"}:
        from report.models import Diagnostic, SourceRange, TextEdit

        return {
            "Diagnostic": Diagnostic,
            "SourceRange": SourceRange,
            "TextEdit": TextEdit,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "FREEZE_TIME",
    "MESSAGES",
    "REPLACEMENTS",
    "REPORT_SCHEMA_VERSION",
    "RULE_NAME",
    "TARGET_CONSTANT",
    "TRAVEL_BACK",
    "Diagnostic",
    "DiagnosticKind",
    "RewriteKind",
    "SourceRange",
    "TextEdit",
    "message_for",
]
