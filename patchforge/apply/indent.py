# patchforge/apply/indent.py
from __future__ import annotations

import re
from typing import List, Optional

from ..models.hunk import DiffLine, LineKind

_LEADING_WS_RE = re.compile(r"^[\t ]*")


def _leading_ws(s: str) -> str:
    """Return the exact leading whitespace (tabs/spaces)."""
    m = _LEADING_WS_RE.match(s)
    return m.group(0) if m else ""


def infer_indentation(inserted: str, previous: Optional[str], unit: str = "  ") -> str:
    """
    Give an inserted line the indentation its neighbour implies. Lines that
    already carry leading whitespace (or are blank) are returned unchanged.

    YAML-shaped heuristics, relative to the previous context/removed line:
      - previous ends with ':'       -> one level deeper (mapping value)
      - both start with '-'          -> same indentation (sequence item)
      - otherwise                    -> same indentation
    """
    if not inserted.strip() or inserted[0] in " \t":
        return inserted
    if previous is None:
        return inserted

    prev_ws = _leading_ws(previous)
    prev_body = previous.strip()
    if prev_body.endswith(":"):
        return prev_ws + unit + inserted
    # sibling sequence items and plain lines both align with the previous line
    return prev_ws + inserted


def resolve_content(
    diff_lines: List[DiffLine],
    file_lines: List[str],
    start: int,
    unit: str = "  ",
) -> List[str]:
    """
    Build the replacement block for a hunk placed at `start`:
      - context lines come from the file when it has a line there
      - removals are dropped
      - additions are re-indented against the last context/removed line
    """
    out: List[str] = []
    previous: Optional[str] = file_lines[start - 1] if 0 < start <= len(file_lines) else None
    pos = start
    for dl in diff_lines:
        if dl.kind is LineKind.ADDITION:
            out.append(infer_indentation(dl.text, previous, unit))
            continue
        file_line = file_lines[pos] if 0 <= pos < len(file_lines) else None
        if dl.kind is LineKind.CONTEXT:
            kept = file_line if file_line is not None else dl.text
            out.append(kept)
            previous = kept
        else:
            previous = file_line if file_line is not None else dl.text
        pos += 1
    return out
