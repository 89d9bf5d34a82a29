# patchforge/apply/splice.py
from __future__ import annotations

from typing import List

from .._logging import NoopLogger, log_event


def apply_hunk(lines: List[str], start: int, length: int, replacement: List[str], log=None) -> List[str]:  # type: ignore[no-untyped-def]
    """
    Replace `length` lines at `start` with `replacement`, returning a new list.
    Out-of-range bounds are clamped (and logged). Empty content is simply
    replaced, which covers file-creation patches.
    """
    log = log if log is not None else NoopLogger()
    if not lines:
        return list(replacement)

    n = len(lines)
    clamped_start = max(0, min(start, n))
    clamped_length = max(0, min(length, n - clamped_start))
    if (clamped_start, clamped_length) != (start, length):
        log_event(
            log, "warning", "hunk.clamped",
            f"Clamped hunk range start={start} length={length} to "
            f"start={clamped_start} length={clamped_length} (file has {n} lines)",
            hunk_start=clamped_start,
        )

    return lines[:clamped_start] + list(replacement) + lines[clamped_start + clamped_length:]
