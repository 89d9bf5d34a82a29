# patchforge/apply/parse.py
from __future__ import annotations

import re
from typing import List, Optional

from .._logging import NoopLogger, log_event
from ..models.hunk import Hunk
from ..utils.text import normalize_eol

# Tool preamble that never belongs to a hunk body.
_PREAMBLE_RE = re.compile(r"^(diff --git |index [0-9a-fA-F]+\.\.[0-9a-fA-F]+|similarity index |rename (from|to) )")


# "--- <path>" / "+++ <path>"; "---verbose" inside a hunk is a removed line
_OLD_FILE_RE = re.compile(r"^--- \S")
_NEW_FILE_RE = re.compile(r"^\+\+\+ \S")


def _is_header_pair(lines: List[str], i: int) -> bool:
    return (
        bool(_OLD_FILE_RE.match(lines[i]))
        and i + 1 < len(lines)
        and bool(_NEW_FILE_RE.match(lines[i + 1]))
    )


def _close(cur: Optional[Hunk], hunks: List[Hunk], log) -> None:  # type: ignore[no-untyped-def]
    if cur is None:
        return
    # blank lines between hunks are separators, not context
    while cur.lines and cur.lines[-1] == "":
        cur.lines.pop()
    if not cur.lines:
        log.debug(f"Dropping empty hunk {cur.header_line!r}")
        return
    hunks.append(cur)


def parse_patch(text: str, log=None) -> List[Hunk]:  # type: ignore[no-untyped-def]
    """
    Split raw patch text into hunks, in order of appearance.

    - The first '---'/'+++' pair is the file header; later pairs are skipped.
    - '@@' starts a new hunk (its header is interpreted later, never here).
    - Diff lines seen while no hunk is open open a synthesized, headerless hunk.
    - Unprefixed lines outside a hunk ('diff --git', 'index ...') are preamble.
    """
    log = log if log is not None else NoopLogger()
    lines = normalize_eol(text).split("\n")
    hunks: List[Hunk] = []
    cur: Optional[Hunk] = None
    seen_file_header = False

    i = 0
    while i < len(lines):
        line = lines[i]

        if _is_header_pair(lines, i):
            _close(cur, hunks, log)
            cur = None
            if not seen_file_header:
                seen_file_header = True
                log.debug(f"File header: {line!r} / {lines[i + 1]!r}")
            else:
                log.debug(f"Skipping duplicate file header at patch line {i + 1}: {line!r}")
            i += 2
            continue

        if line.startswith("@@"):
            _close(cur, hunks, log)
            cur = Hunk(line)
        elif _PREAMBLE_RE.match(line):
            _close(cur, hunks, log)
            cur = None
        elif cur is not None:
            cur.lines.append(line)
        elif line.startswith(("---", "+++")):
            log.debug(f"Skipping stray file header line {line!r}")
        elif line[:1] in ("+", "-", " "):
            log.debug(f"Diff lines before any hunk header at patch line {i + 1}; synthesizing a hunk")
            cur = Hunk(None, [line], synthetic=True)
        i += 1

    _close(cur, hunks, log)
    log_event(log, "debug", "patch.parsed",
              f"Parsed {len(hunks)} hunk(s) from {len(lines)} patch lines", hunk_count=len(hunks))
    return hunks


def extract_new_file_content(hunks: List[Hunk]) -> Optional[str]:
    """
    Content for a file being created by a patch with no '@@' hunks: the
    added lines, markers stripped. None when the patch has real hunks or
    adds nothing.
    """
    if any(not h.synthetic for h in hunks):
        return None
    added = [text for h in hunks for text in h.added()]
    if not added:
        return None
    return "\n".join(added)
