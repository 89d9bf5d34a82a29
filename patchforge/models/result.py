from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..errors.patch import PatchRejectedError
from .hunk import HunkHeader


class Outcome(str, Enum):
    """Tagged result of a single pipeline stage."""

    MATCHED = "matched"      # input was well-formed / found where expected
    RECOVERED = "recovered"  # a heuristic filled the gap
    FAILED = "failed"


class Confidence(str, Enum):
    EXACT_DECLARED = "exact-declared"
    EXACT_WINDOWED = "exact-windowed"
    EXACT_GLOBAL = "exact-global"
    FUZZY = "fuzzy"
    FALLBACK_DECLARED = "fallback-declared"

    @property
    def exact(self) -> bool:
        return self in (Confidence.EXACT_DECLARED, Confidence.EXACT_WINDOWED, Confidence.EXACT_GLOBAL)


class PatchStatus(str, Enum):
    NOOP = "noop"
    APPLIED = "applied"
    PARTIALLY_APPLIED = "partially-applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class HeaderResult:
    header: HunkHeader
    outcome: Outcome
    reason: str = ""


@dataclass(frozen=True)
class Location:
    """Where a hunk was placed and how much that placement can be trusted."""

    start: int
    confidence: Confidence
    score: float
    outcome: Outcome
    reason: str = ""


@dataclass
class HunkReport:
    index: int
    header: Optional[str]
    declared_start: int
    outcome: Outcome
    start: Optional[int] = None
    confidence: Optional[Confidence] = None
    removed: int = 0
    added: int = 0
    reason: str = ""

    @property
    def applied(self) -> bool:
        return self.outcome is not Outcome.FAILED


@dataclass
class PatchResult:
    """Updated content plus what happened to every hunk."""

    status: PatchStatus
    content: str
    hunks: List[HunkReport] = field(default_factory=list)
    reason: str = ""

    @property
    def changed(self) -> bool:
        return self.status in (PatchStatus.APPLIED, PatchStatus.PARTIALLY_APPLIED)

    def raise_for_status(self) -> "PatchResult":
        """Raise PatchRejectedError if the patch was rejected; otherwise return self."""
        if self.status is PatchStatus.REJECTED:
            raise PatchRejectedError(self)
        return self
