"""Per-category log-likelihood scoring.

For every category the score of a document is

    score(C) = sum over distinct document words w of ln(n(w, C) / N(C))

where ``n(w, C)`` is the trained count of ``w`` in ``C`` (or a smoothing
constant when ``C`` never saw ``w``) and ``N(C)`` is the category's total
word mass. A word contributes once however often the document repeats it.

Scores closer to 0 are better matches. Degenerate inputs (an empty
category, a zero count) are carried through as IEEE infinities or NaN
rather than raising, so the decision step can see and filter them.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from .errors import BackendError
from .persistence import CorpusStore

logger = logging.getLogger(__name__)

# Substitute counts for words a category has never seen.
SMOOTHING = 0.1
STRICT_SMOOTHING = 0.000045


def smoothing_constant(only_matched_words: bool) -> float:
    """Return the unseen-word count for the classification mode."""
    return STRICT_SMOOTHING if only_matched_words else SMOOTHING


def log_ratio(count: float, total: float) -> float:
    """Natural log of ``count / total`` with IEEE semantics.

    Division by zero yields ``+inf`` (positive count), ``-inf`` (negative
    count) or ``nan`` (zero count); ``ln(0)`` is ``-inf`` and the log of a
    negative ratio is ``nan``.
    """
    if total == 0:
        if count > 0:
            ratio = math.inf
        elif count < 0:
            ratio = -math.inf
        else:
            ratio = math.nan
    else:
        ratio = count / total

    if math.isnan(ratio) or ratio < 0:
        return math.nan
    if ratio == 0:
        return -math.inf
    return math.log(ratio)


def _as_count(word: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise BackendError(f"Non-integer count {value!r} stored for word {word!r}") from exc


def category_total(table: Mapping[str, Any]) -> int:
    """Total word mass of a category table (0 when empty)."""
    return sum(_as_count(word, count) for word, count in table.items())


def score_category(
    word_counts: Mapping[str, int],
    table: Mapping[str, Any],
    only_matched_words: bool = False,
) -> float:
    """Score one document against one category table.

    Args:
        word_counts: The document's ``{word: occurrences}``.
        table: The category's trained ``{word: count}``.
        only_matched_words: Select the strict-mode smoothing constant.

    Returns:
        Sum of log ratios; 0.0 for an empty document.
    """
    total = category_total(table)
    unseen = smoothing_constant(only_matched_words)

    score = 0.0
    for word in word_counts:
        count = _as_count(word, table[word]) if word in table else unseen
        score += log_ratio(count, total)
    return score


def score_categories(
    word_counts: Mapping[str, int],
    corpus: CorpusStore,
    only_matched_words: bool = False,
) -> dict[str, float]:
    """Score a document against every category of a corpus store.

    Returns exactly one entry per category the store enumerates, in
    enumeration order. Store read failures propagate to the caller.
    """
    scores: dict[str, float] = {}
    for category in corpus.get_categories():
        table = corpus.get_words_with_count_for_category(category)
        scores[category] = score_category(word_counts, table, only_matched_words)
        logger.debug("Scored category %r: %s", category, scores[category])
    return scores
