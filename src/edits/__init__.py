"""Edit application for timecop-check."""

from edits.apply import (
    OverlappingEditsError,
    apply_edits,
    apply_edits_bytes,
    autocorrect_source,
)

__all__ = [
    "OverlappingEditsError",
    "apply_edits",
    "apply_edits_bytes",
    "autocorrect_source",
]
