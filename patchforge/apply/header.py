# patchforge/apply/header.py
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .._logging import log_event
from ..models.hunk import Hunk, HunkHeader
from ..models.result import HeaderResult, Outcome

HUNK_HEADER_RE = re.compile(r"^@@\s*-(\d+)(?:,(\d*))?\s+\+(\d+)(?:,(\d*))?\s*@@")


def _length(group: Optional[str]) -> int:
    # "-3" and "-3," both mean a one-line range
    return int(group) if group else 1


def parse_header_line(header_line: Optional[str]) -> Optional[HunkHeader]:
    """Return the declared geometry, or None when the line is not a usable '@@' header."""
    if not header_line:
        return None
    m = HUNK_HEADER_RE.match(header_line.strip())
    if not m:
        return None
    return HunkHeader(
        old_start=int(m.group(1)),
        old_length=_length(m.group(2)),
        new_start=int(m.group(3)),
        new_length=_length(m.group(4)),
    )


def reconstruct_header(raw_lines: List[str]) -> HunkHeader:
    """Infer geometry from the hunk body; the position is unknown so it anchors at file start."""
    context, removed, added = Hunk(None, raw_lines).counts()
    return HunkHeader(
        old_start=0,
        old_length=max(1, removed + context),
        new_start=0,
        new_length=max(1, added + context),
    )


def interpret_header(header_line: Optional[str], raw_lines: List[str], log) -> HeaderResult:  # type: ignore[no-untyped-def]
    """Never raises: a malformed or missing header is rebuilt from the hunk body."""
    parsed = parse_header_line(header_line)
    if parsed is not None:
        log_event(
            log, "debug", "hunk.header",
            f"Parsed hunk header {header_line!r}: -{parsed.old_start},{parsed.old_length} "
            f"+{parsed.new_start},{parsed.new_length}",
            hunk_header=header_line,
        )
        return HeaderResult(parsed, Outcome.MATCHED)

    rebuilt = reconstruct_header(raw_lines)
    reason = (
        f"malformed hunk header {header_line!r}" if header_line else "hunk has no header"
    )
    log_event(
        log, "warning", "hunk.header",
        f"{reason}; reconstructed -{rebuilt.old_start},{rebuilt.old_length} "
        f"+{rebuilt.new_start},{rebuilt.new_length} from {len(raw_lines)} lines",
        hunk_header=header_line,
    )
    return HeaderResult(rebuilt, Outcome.RECOVERED, reason)


def sort_hunks(entries: List[Tuple[Hunk, HeaderResult]]) -> List[Tuple[Hunk, HeaderResult]]:
    """Order (hunk, header) pairs by declared old start; equal starts keep patch order."""
    return sorted(entries, key=lambda e: e[1].header.declared_old_start)
