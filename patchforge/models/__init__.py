from .hunk import DiffLine, Hunk, HunkHeader, LineKind, classify_line
from .result import (
    Confidence,
    HeaderResult,
    HunkReport,
    Location,
    Outcome,
    PatchResult,
    PatchStatus,
)

__all__ = [
    "DiffLine",
    "Hunk",
    "HunkHeader",
    "LineKind",
    "classify_line",
    "Confidence",
    "HeaderResult",
    "HunkReport",
    "Location",
    "Outcome",
    "PatchResult",
    "PatchStatus",
]
