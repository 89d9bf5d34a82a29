from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class LineKind(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    REMOVAL = "removal"


@dataclass(frozen=True)
class DiffLine:
    """One hunk line with its marker stripped."""

    kind: LineKind
    text: str


def classify_line(raw: str) -> Optional[DiffLine]:
    """
    Tag a raw hunk line. Empty lines are blank context, unprefixed lines are
    context verbatim, and '\\ No newline at end of file' markers yield None.
    """
    if raw == "":
        return DiffLine(LineKind.CONTEXT, "")
    tag = raw[0]
    if tag == "+":
        return DiffLine(LineKind.ADDITION, raw[1:])
    if tag == "-":
        return DiffLine(LineKind.REMOVAL, raw[1:])
    if tag == " ":
        return DiffLine(LineKind.CONTEXT, raw[1:])
    if tag == "\\":
        return None
    return DiffLine(LineKind.CONTEXT, raw)


@dataclass(frozen=True)
class HunkHeader:
    """Hunk geometry as declared in (or reconstructed for) an '@@' header. Starts are 1-based."""

    old_start: int
    old_length: int
    new_start: int
    new_length: int

    @property
    def declared_old_start(self) -> int:
        """Zero-based line the hunk claims to start at in the original text."""
        # '-N,0' inserts after line N
        if self.old_length == 0:
            return max(0, self.old_start)
        return max(0, self.old_start - 1)


@dataclass
class Hunk:
    """A contiguous block of a patch. `header_line` is None for synthesized hunks."""

    header_line: Optional[str]
    lines: List[str] = field(default_factory=list)
    synthetic: bool = False

    def diff_lines(self) -> List[DiffLine]:
        out: List[DiffLine] = []
        for raw in self.lines:
            dl = classify_line(raw)
            if dl is not None:
                out.append(dl)
        return out

    def old_side(self) -> List[str]:
        """Lines the hunk expects to find in the file (context and removals)."""
        return [dl.text for dl in self.diff_lines() if dl.kind is not LineKind.ADDITION]

    def added(self) -> List[str]:
        return [dl.text for dl in self.diff_lines() if dl.kind is LineKind.ADDITION]

    def counts(self) -> tuple[int, int, int]:
        """Return (context, removed, added) line counts."""
        context = removed = added = 0
        for dl in self.diff_lines():
            if dl.kind is LineKind.CONTEXT:
                context += 1
            elif dl.kind is LineKind.REMOVAL:
                removed += 1
            else:
                added += 1
        return context, removed, added
