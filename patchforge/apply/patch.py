# patchforge/apply/patch.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .._logging import resolve_logger, log_event
from ..models.hunk import Hunk, LineKind
from ..models.result import (
    HeaderResult,
    HunkReport,
    Outcome,
    PatchResult,
    PatchStatus,
)
from ..options import DEFAULT_OPTIONS, PatchOptions
from ..utils.text import cleanup_patch_text, detect_eol, normalize_eol
from .header import interpret_header, sort_hunks
from .indent import resolve_content
from .locate import locate_hunk
from .parse import extract_new_file_content, parse_patch
from .similarity import DEFAULT_SCORER, SimilarityScorer
from .splice import apply_hunk

__all__ = ["apply_patch"]


def _split_content(content: str) -> Tuple[List[str], bool]:
    """Return (lines, had_trailing_newline) for `\\n`-normalized content."""
    if not content:
        return [], False
    lines = content.split("\n")
    had_trailing_nl = lines[-1] == ""
    if had_trailing_nl:
        lines.pop()
    return lines, had_trailing_nl


def _apply_one(
    index: int,
    hunk: Hunk,
    header: HeaderResult,
    current: List[str],
    drift: int,
    options: PatchOptions,
    scorer: SimilarityScorer,
    log,  # type: ignore[no-untyped-def]
) -> Tuple[List[str], int, HunkReport]:
    diff_lines = hunk.diff_lines()
    old_side = hunk.old_side()
    anchor = old_side[: options.max_context]
    declared = header.header.declared_old_start
    # a reconstructed header has no real position, so earlier edits don't shift it
    hint = declared + drift if header.outcome is Outcome.MATCHED else declared

    location = locate_hunk(current, hint, anchor, options=options, scorer=scorer, log=log)
    log_event(
        log, "info" if location.confidence.exact else "warning", "hunk.located",
        f"Hunk #{index + 1}: declared line {declared}, hint {hint}, located at {location.start} "
        f"via {location.confidence.value} (score={location.score:.3f})",
        hunk_index=index, hunk_start=location.start,
        locate_method=location.confidence.value, score=location.score,
    )

    if header.outcome is Outcome.MATCHED and header.header.old_length != len(old_side):
        log.debug(
            f"Hunk #{index + 1}: header declares {header.header.old_length} old lines, "
            f"body has {len(old_side)}; using the body"
        )

    replacement = resolve_content(diff_lines, current, location.start, options.yaml_indent)
    updated = apply_hunk(current, location.start, len(old_side), replacement, log=log)

    removed = sum(1 for dl in diff_lines if dl.kind is LineKind.REMOVAL)
    added = sum(1 for dl in diff_lines if dl.kind is LineKind.ADDITION)
    recovered = header.outcome is Outcome.RECOVERED or location.outcome is Outcome.RECOVERED
    reason = "; ".join(r for r in (header.reason, location.reason) if r)
    report = HunkReport(
        index=index,
        header=hunk.header_line,
        declared_start=declared,
        outcome=Outcome.RECOVERED if recovered else Outcome.MATCHED,
        start=location.start,
        confidence=location.confidence,
        removed=removed,
        added=added,
        reason=reason,
    )
    log_event(
        log, "info", "hunk.applied",
        f"Hunk #{index + 1}: -{removed} +{added} at line {location.start}; file now has {len(updated)} lines",
        hunk_index=index, hunk_start=location.start,
    )
    return updated, len(replacement) - len(old_side), report


def _status(reports: List[HunkReport]) -> PatchStatus:
    applied = sum(1 for r in reports if r.applied)
    if applied == 0:
        return PatchStatus.REJECTED
    if applied < len(reports):
        return PatchStatus.PARTIALLY_APPLIED
    return PatchStatus.APPLIED


def _apply(
    content: str,
    patch: str,
    options: PatchOptions,
    scorer: SimilarityScorer,
    log,  # type: ignore[no-untyped-def]
) -> PatchResult:
    eol = detect_eol(content)
    lines, had_trailing_nl = _split_content(normalize_eol(content))

    hunks = parse_patch(cleanup_patch_text(patch), log)

    if not lines:
        created = extract_new_file_content(hunks)
        if created is not None:
            log_event(log, "info", "patch.finished",
                      "Patch creates the file from headerless added lines",
                      patch_status=PatchStatus.APPLIED.value)
            return PatchResult(PatchStatus.APPLIED, created.replace("\n", eol))

    if not hunks:
        log_event(log, "warning", "patch.finished", "Patch contains no hunks; nothing applied",
                  patch_status=PatchStatus.REJECTED.value)
        return PatchResult(PatchStatus.REJECTED, content, reason="patch contains no hunks")

    entries = sort_hunks([(h, interpret_header(h.header_line, h.lines, log)) for h in hunks])

    current = lines
    drift = 0
    reports: List[HunkReport] = []
    for index, (hunk, header) in enumerate(entries):
        try:
            current, delta, report = _apply_one(index, hunk, header, current, drift, options, scorer, log)
            drift += delta
        except Exception as e:
            log_event(log, "warning", "hunk.failed", f"Hunk #{index + 1} skipped: {e!r}",
                      hunk_index=index)
            report = HunkReport(
                index=index,
                header=hunk.header_line,
                declared_start=header.header.declared_old_start,
                outcome=Outcome.FAILED,
                reason=f"{type(e).__name__}: {e}",
            )
        reports.append(report)

    status = _status(reports)
    if status is PatchStatus.REJECTED:
        new_content = content
    else:
        new_content = eol.join(current) + (eol if had_trailing_nl and current else "")

    failed = [r.index + 1 for r in reports if not r.applied]
    log_event(
        log, "info", "patch.finished",
        f"Patch {status.value}: {len(reports) - len(failed)}/{len(reports)} hunk(s) applied"
        + (f", skipped {failed}" if failed else ""),
        patch_status=status.value,
    )
    reason = "no hunk could be applied" if status is PatchStatus.REJECTED else ""
    return PatchResult(status, new_content, reports, reason)


def apply_patch(
    content: str,
    patch: Optional[str],
    *,
    options: Optional[PatchOptions] = None,
    scorer: Optional[SimilarityScorer] = None,
    logger=None,
    log: bool = False,
) -> PatchResult:
    """
    Apply a free-form, possibly malformed unified-diff-like patch to `content`.

    Hunks are applied in ascending declared-position order against the
    progressively updated text. Each hunk is located exactly, then fuzzily,
    then at its declared line; a hunk that fails is skipped and the rest
    continue.

    Never raises: an unexpected failure of the whole operation yields
    PatchStatus.REJECTED with the original content and the error in `reason`.
    Use `PatchResult.raise_for_status()` to turn rejection into an exception.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    if patch is None or not patch.strip():
        log.debug("No pending patch; content unchanged")
        return PatchResult(PatchStatus.NOOP, content)

    log_event(
        log, "info", "patch.started",
        f"Starting patch application (patch {len(patch)} chars, content {len(content)} chars)",
    )
    try:
        return _apply(content, patch, options or DEFAULT_OPTIONS, scorer or DEFAULT_SCORER, log)
    except Exception as e:
        log.exception(f"Failed to apply patch: {e!r}", extra={"patch_event": "patch.failed"})
        return PatchResult(PatchStatus.REJECTED, content, reason=f"{type(e).__name__}: {e}")
