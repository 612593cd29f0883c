"""Data models for classification results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .decision import rank_scores


def _json_score(score: float) -> float | str:
    """Render non-finite scores as strings so the output stays valid JSON."""
    if math.isnan(score):
        return "nan"
    if math.isinf(score):
        return "inf" if score > 0 else "-inf"
    return score


@dataclass
class ClassificationResult:
    """A classification decision with the scores behind it.

    Attributes:
        category: The winning category (``""`` for an empty corpus,
            ``"unknown"`` when strict mode filtered out every category).
        scores: Raw ``{category: score}`` in corpus enumeration order.
        word_counts: The document's normalized ``{word: occurrences}``.
        only_matched_words: Whether strict mode produced the decision.
    """

    category: str
    scores: dict[str, float] = field(default_factory=dict)
    word_counts: dict[str, int] = field(default_factory=dict)
    only_matched_words: bool = False

    @property
    def distinct_words(self) -> int:
        """Number of distinct normalized tokens in the document."""
        return len(self.word_counts)

    @property
    def ranking(self) -> list[tuple[str, float]]:
        """Categories ordered best first."""
        return rank_scores(self.scores)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "only_matched_words": self.only_matched_words,
            "distinct_words": self.distinct_words,
            "scores": {category: _json_score(score) for category, score in self.ranking},
            "word_counts": dict(
                sorted(self.word_counts.items(), key=lambda x: (-x[1], x[0]))
            ),
        }
