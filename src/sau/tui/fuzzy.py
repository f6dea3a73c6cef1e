"""Fuzzy matching utilities.

A needle matches a haystack either as a contiguous substring (always the
strongest kind of match) or as an in-order subsequence of its characters.
Higher score = better match.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

SUBSTRING_BASE_SCORE = 1_000_000

_MATCH_SCORE = 10
_CONSECUTIVE_BONUS = 15
_GAP_PENALTY = 2
_WORD_BOUNDARY_BONUS = 20

_WORD_SEPARATORS = frozenset(" _-:/([")


def _is_word_boundary(prev: str | None, current: str) -> bool:
    if prev is None:
        return True
    if prev in _WORD_SEPARATORS:
        return True
    return prev.islower() and current.isupper()


def fuzzy_score(haystack: str, needle: str) -> int | None:
    """Score *needle* against *haystack*, or return ``None`` if it does not match.

    Both strings are compared as given; callers lowercase them for
    case-insensitive matching.  The needle is trimmed first and an empty
    needle never matches.
    """
    needle = needle.strip()
    if not needle:
        return None

    if needle in haystack:
        return SUBSTRING_BASE_SCORE - (len(haystack) - len(needle))

    score = 0
    first_match_index: int | None = None
    last_match_index: int | None = None
    pos = 0

    for needle_char in needle:
        # Single forward walk: haystack positions are never revisited.
        while pos < len(haystack) and haystack[pos] != needle_char:
            pos += 1
        if pos >= len(haystack):
            return None

        i = pos
        prev = haystack[i - 1] if i > 0 else None
        score += _MATCH_SCORE

        if last_match_index is not None:
            if i == last_match_index + 1:
                score += _CONSECUTIVE_BONUS
            else:
                score -= (i - last_match_index - 1) * _GAP_PENALTY

        if _is_word_boundary(prev, haystack[i]):
            score += _WORD_BOUNDARY_BONUS

        if first_match_index is None:
            first_match_index = i
        last_match_index = i
        pos = i + 1

    if first_match_index is not None:
        score -= first_match_index

    return score


def best_match(
    items: Iterable[T], query: str, get_text: Callable[[T], str]
) -> int | None:
    """Return the index of the best-scoring item for *query*, or ``None``.

    Matching is case-insensitive.  Ties keep the first item encountered.
    """
    needle = query.strip().lower()
    if not needle:
        return None

    best: tuple[int, int] | None = None
    for index, item in enumerate(items):
        score = fuzzy_score(get_text(item).lower(), needle)
        if score is None:
            continue
        if best is None or score > best[1]:
            best = (index, score)

    return best[0] if best is not None else None
