"""Turning a score table into a category decision."""

from __future__ import annotations

import logging
import math
from typing import Mapping

logger = logging.getLogger(__name__)

EMPTY_LABEL = ""
UNKNOWN_CATEGORY = "unknown"

# Average per-word score below which a category counts as unmatched.
UNMATCHED_THRESHOLD = -10


def _rank_key(item: tuple[str, float]) -> tuple[bool, float]:
    score = item[1]
    if math.isnan(score):
        return (True, 0.0)
    return (False, -score)


def rank_scores(scores: Mapping[str, float]) -> list[tuple[str, float]]:
    """Order categories best first.

    The sort is stable, so equal scores keep the store's enumeration
    order. NaN scores sort after every number.
    """
    return sorted(scores.items(), key=_rank_key)


def filter_matched(scores: Mapping[str, float], distinct_words: int) -> dict[str, float]:
    """Drop categories the document effectively did not match.

    A category is removed when its score is non-finite, exactly 0 (no word
    was scored), or below ``UNMATCHED_THRESHOLD * distinct_words``. When
    nothing survives the result is ``{"unknown": 1.0}``.
    """
    floor = UNMATCHED_THRESHOLD * distinct_words
    kept = {
        category: score
        for category, score in scores.items()
        if math.isfinite(score) and score != 0 and score >= floor
    }
    logger.debug(
        "Strict filter kept %d of %d categories (floor %s)", len(kept), len(scores), floor
    )
    return kept or {UNKNOWN_CATEGORY: 1.0}


def select_category(
    scores: Mapping[str, float],
    distinct_words: int,
    only_matched_words: bool = False,
) -> str:
    """Pick the winning category.

    Args:
        scores: ``{category: score}`` in enumeration order.
        distinct_words: Number of distinct tokens in the document.
        only_matched_words: Apply the strict-mode filter first.

    Returns:
        The best category, ``"unknown"`` when strict mode filtered out
        everything, or ``""`` when there were no categories at all.
    """
    if not scores:
        return EMPTY_LABEL
    if only_matched_words:
        scores = filter_matched(scores, distinct_words)
    return rank_scores(scores)[0][0]
