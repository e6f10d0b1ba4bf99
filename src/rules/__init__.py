"""Rule definitions for timecop-check."""

from rules.config import (
    ConfigError,
    TimecopConfig,
    load_config,
)
from rules.timecop import (
    CallShape,
    TimecopMatch,
    check_source,
    check_tree,
    classify_call,
    compute_edit,
    emit_diagnostic,
    match_timecop,
)

__all__ = [
    "CallShape",
    "ConfigError",
    "TimecopConfig",
    "TimecopMatch",
    "check_source",
    "check_tree",
    "classify_call",
    "compute_edit",
    "emit_diagnostic",
    "load_config",
    "match_timecop",
]
