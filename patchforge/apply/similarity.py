"""
Line similarity strategies used by fuzzy hunk location.

Any callable taking two strings and returning a float in [0, 1] can be passed
as `scorer=` to `apply_patch` / `locate_hunk`.
"""
from __future__ import annotations

import difflib
from collections import Counter
from typing import Callable

SimilarityScorer = Callable[[str, str], float]


def _tokens(s: str) -> Counter:
    return Counter(tok for tok in s.split() if len(tok) >= 2)


def token_overlap_similarity(a: str, b: str) -> float:
    """
    Tiered score:
      1.0  identical (including both empty)
      0.0  exactly one side empty
      0.9  equal once whitespace is removed
      0.8  one contains the other
      else 2 * shared tokens / total tokens, over tokens of length >= 2
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    if "".join(a.split()) == "".join(b.split()):
        return 0.9
    sa, sb = a.strip(), b.strip()
    if sa and sb and (sa in sb or sb in sa):
        return 0.8
    ta, tb = _tokens(a), _tokens(b)
    total = sum(ta.values()) + sum(tb.values())
    if total == 0:
        return 0.0
    matches = sum((ta & tb).values())
    return 2 * matches / total


def sequence_similarity(a: str, b: str) -> float:
    """Character-level SequenceMatcher ratio on trimmed lines."""
    a, b = a.strip(), b.strip()
    if a == b:
        return 1.0
    return difflib.SequenceMatcher(None, a, b, autojunk=False).ratio()


DEFAULT_SCORER: SimilarityScorer = token_overlap_similarity
