# patchforge/apply/locate.py
"""
Hunk location: decide which line of the current content a hunk starts at.

Tiers, first success wins:
  1. exact at the declared start
  2. exact within +/- window of it, nearest first
  3. exact anywhere else, nearest first
  4. fuzzy: best-scoring window above the confidence threshold
  5. the declared start, unverified
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .._logging import NoopLogger, log_event
from ..models.result import Confidence, Location, Outcome
from ..options import DEFAULT_OPTIONS, PatchOptions
from .similarity import DEFAULT_SCORER, SimilarityScorer


def _lines_equal(a: str, b: str) -> bool:
    """Exact comparison that tolerates trailing whitespace only."""
    return a == b or a.rstrip() == b.rstrip()


def matches_at(lines: List[str], pos: int, anchor: List[str]) -> bool:
    if pos < 0 or pos + len(anchor) > len(lines):
        return False
    return all(_lines_equal(lines[pos + j], anchor[j]) for j in range(len(anchor)))


def _nearest_first(positions: Iterable[int], hint: int) -> List[int]:
    return sorted(positions, key=lambda p: (abs(p - hint), p))


def find_exact_windowed(lines: List[str], hint: int, anchor: List[str], window: int) -> Optional[int]:
    last = len(lines) - len(anchor)
    lo, hi = max(0, hint - window), min(last, hint + window)
    for pos in _nearest_first(range(lo, hi + 1), hint):
        if pos != hint and matches_at(lines, pos, anchor):
            return pos
    return None


def find_exact_global(lines: List[str], hint: int, anchor: List[str], window: int) -> Optional[int]:
    last = len(lines) - len(anchor)
    outside = (p for p in range(0, last + 1) if abs(p - hint) > window)
    for pos in _nearest_first(outside, hint):
        if matches_at(lines, pos, anchor):
            return pos
    return None


def score_window(
    lines: List[str],
    pos: int,
    anchor: List[str],
    hint: int,
    options: PatchOptions = DEFAULT_OPTIONS,
    scorer: SimilarityScorer = DEFAULT_SCORER,
) -> float:
    """Mean line similarity plus run and proximity bonuses."""
    scores = [scorer(anchor[j], lines[pos + j]) for j in range(len(anchor))]
    total = sum(scores) / len(scores)

    strong = options.run_line_threshold
    if any(scores[j] > strong and scores[j + 1] > strong for j in range(len(scores) - 1)):
        total += options.run_bonus

    distance = abs(pos - hint)
    if options.proximity_radius > 0 and distance < options.proximity_radius:
        total += options.proximity_bonus * (1 - distance / options.proximity_radius)
    return total


def find_fuzzy(
    lines: List[str],
    hint: int,
    anchor: List[str],
    options: PatchOptions = DEFAULT_OPTIONS,
    scorer: SimilarityScorer = DEFAULT_SCORER,
) -> Tuple[int, float]:
    """Return (best_pos, best_score), or (-1, 0.0) when there is nothing to score."""
    if not lines or not anchor:
        return -1, 0.0
    anchor = anchor[: len(lines)]
    best_pos, best_key = -1, (0.0, 0)
    for pos in range(0, len(lines) - len(anchor) + 1):
        score = score_window(lines, pos, anchor, hint, options, scorer)
        key = (score, -abs(pos - hint))
        if best_pos < 0 or key > best_key:
            best_pos, best_key = pos, key
    return best_pos, best_key[0]


def locate_hunk(
    lines: List[str],
    declared_start: int,
    anchor: List[str],
    *,
    options: PatchOptions = DEFAULT_OPTIONS,
    scorer: SimilarityScorer = DEFAULT_SCORER,
    log=None,  # type: ignore[no-untyped-def]
) -> Location:
    """Place a hunk whose old side begins with `anchor` near `declared_start` (0-based)."""
    log = log if log is not None else NoopLogger()
    hint = max(0, min(declared_start, len(lines)))

    if not anchor:
        return Location(hint, Confidence.FALLBACK_DECLARED, 0.0, Outcome.RECOVERED,
                        "hunk has no context or removed lines to anchor on")

    if matches_at(lines, hint, anchor):
        return Location(hint, Confidence.EXACT_DECLARED, 1.0, Outcome.MATCHED)

    pos = find_exact_windowed(lines, hint, anchor, options.window)
    if pos is not None:
        return Location(pos, Confidence.EXACT_WINDOWED, 1.0, Outcome.MATCHED,
                        f"context found {pos - hint:+d} lines from declared start")

    pos = find_exact_global(lines, hint, anchor, options.window)
    if pos is not None:
        return Location(pos, Confidence.EXACT_GLOBAL, 1.0, Outcome.MATCHED,
                        f"context found {pos - hint:+d} lines from declared start")

    if len(lines) > options.max_fuzzy_lines:
        reason = (
            f"file has {len(lines)} lines (> {options.max_fuzzy_lines}); "
            "fuzzy search skipped, using declared start"
        )
        log_event(log, "warning", "hunk.locate", reason, hunk_start=hint)
        return Location(hint, Confidence.FALLBACK_DECLARED, 0.0, Outcome.RECOVERED, reason)

    pos, score = find_fuzzy(lines, hint, anchor, options, scorer)
    log_event(log, "debug", "hunk.locate",
              f"Best fuzzy window at line {pos} (score={score:.3f}, threshold={options.fuzzy_threshold})",
              hunk_start=pos, score=score)
    if pos >= 0 and score > options.fuzzy_threshold:
        return Location(pos, Confidence.FUZZY, score, Outcome.RECOVERED,
                        f"fuzzy match score {score:.3f}")

    reason = f"no confident match (best score {score:.3f}); using declared start"
    log_event(log, "warning", "hunk.locate", reason, hunk_start=hint, score=score)
    return Location(hint, Confidence.FALLBACK_DECLARED, score, Outcome.RECOVERED, reason)
