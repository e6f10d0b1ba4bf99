"""Diagnostic contract definitions.

Kinds, messages and replacement tokens are the stable surface shared by the
rule engine and the reporters. Messages are part of the output contract and
must not change between releases without a schema bump.
"""

from __future__ import annotations

from enum import Enum

# Report schema version for JSONL diagnostic records.
REPORT_SCHEMA_VERSION = 1

RULE_NAME = "Rails/Timecop"
TARGET_CONSTANT = "Timecop"

FREEZE_TIME = "freeze_time"
TRAVEL_BACK = "travel_back"


class DiagnosticKind(str, Enum):
    """Shape-specific classification of a Timecop usage."""

    NO_ARG_BARE_CALL = "no_arg_bare_call"
    CALL_WITH_ARGUMENTS = "call_with_arguments"
    RETURN_CALL = "return_call"
    TRAVEL_CALL = "travel_call"
    GENERIC_USAGE = "generic_usage"


class RewriteKind(str, Enum):
    """Autocorrection applied to a classified call site."""

    REPLACE_WITH_FREEZE_TIME = "replace_with_freeze_time"
    REPLACE_WITH_TRAVEL_BACK = "replace_with_travel_back"
    NO_REWRITE = "no_rewrite"


MESSAGES: dict[DiagnosticKind, str] = {
    DiagnosticKind.NO_ARG_BARE_CALL: (
        "Use `freeze_time` instead of `Timecop.freeze`"
    ),
    DiagnosticKind.CALL_WITH_ARGUMENTS: (
        "Use `travel` or `travel_to` instead of `Timecop.freeze`"
    ),
    DiagnosticKind.RETURN_CALL: "Use `travel_back` instead of `Timecop.return`",
    DiagnosticKind.TRAVEL_CALL: (
        "Use `travel` or `travel_to` instead of `Timecop.travel`. If you "
        "need time to keep flowing, simulate it by travelling again."
    ),
    DiagnosticKind.GENERIC_USAGE: (
        "Use `ActiveSupport::Testing::TimeHelpers` instead of `Timecop`"
    ),
}

REPLACEMENTS: dict[RewriteKind, str] = {
    RewriteKind.REPLACE_WITH_FREEZE_TIME: FREEZE_TIME,
    RewriteKind.REPLACE_WITH_TRAVEL_BACK: TRAVEL_BACK,
}


def message_for(kind: DiagnosticKind) -> str:
    return MESSAGES[kind]


__all__ = [
    "FREEZE_TIME",
    "MESSAGES",
    "REPLACEMENTS",
    "REPORT_SCHEMA_VERSION",
    "RULE_NAME",
    "TARGET_CONSTANT",
    "TRAVEL_BACK",
    "DiagnosticKind",
    "RewriteKind",
    "message_for",
]
