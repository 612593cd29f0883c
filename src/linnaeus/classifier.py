"""Classify documents against a trained word-frequency corpus.

The ``Classifier`` ties the pieces together: it normalizes text into word
counts, scores those counts against every category the corpus store
enumerates, and picks the most likely category.

Example::

    classifier = Classifier(corpus=MemoryCorpus({
        "sports": {"ball": 10, "game": 5},
        "politics": {"vote": 8, "law": 2},
    }))

    classifier.classify("ball game ball")                # "sports"
    classifier.classification_scores("ball game ball")   # {"sports": -1.504..., ...}

Strict mode (``only_matched_words``) scores unmatched words with a much
smaller smoothing count and then drops every category whose score is
non-finite, zero, or worse than -10 per distinct word. If no category
survives, the document is classified as ``"unknown"``.
"""

from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG, ClassifierConfig
from .decision import select_category
from .errors import ConfigurationError, LinnaeusError
from .models import ClassificationResult
from .persistence import CorpusStore
from .scoring import score_categories
from .stopwords import load_stopwords
from .tokenizer import WordTokenizer

logger = logging.getLogger(__name__)


class Classifier:
    """Naive-Bayes style classifier over a read-only corpus store.

    Instances hold no per-call state and never write to the store, so
    one classifier can serve concurrent callers as long as the store
    supports concurrent reads.

    Args:
        config: Classifier options. Defaults to ``DEFAULT_CONFIG``.
        corpus: Ready-made corpus store. When omitted, one is built from
            ``config.persistence_backend(**config.backend_options)``.

    Raises:
        ConfigurationError: If the configuration or backend connection
            parameters are malformed.
        BackendError: If the stopword source cannot be read.
    """

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        corpus: CorpusStore | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

        self._db = corpus if corpus is not None else self._build_backend(self.config)
        self._tokenizer = WordTokenizer(
            stopwords=load_stopwords(self.config.stopword_source),
            stemmer=self.config.stemmer,
            skip_stemming=self.config.skip_stemming,
            encoding=self.config.text_encoding,
        )

    @staticmethod
    def _build_backend(config: ClassifierConfig) -> CorpusStore:
        try:
            return config.persistence_backend(**config.backend_options)
        except LinnaeusError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Cannot construct {getattr(config.persistence_backend, '__name__', 'backend')}: {exc}"
            ) from exc

    @property
    def corpus(self) -> CorpusStore:
        """The corpus store this classifier reads from."""
        return self._db

    @property
    def only_matched_words(self) -> bool:
        return self.config.only_matched_words

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def count_word_occurrences(self, text: str | bytes) -> dict[str, int]:
        """Normalize text into ``{word: occurrences}``."""
        return self._tokenizer.count_word_occurrences(text)

    def classification_scores(self, text: str | bytes) -> dict[str, float]:
        """Score a document against every category in the corpus.

        The closer a score is to 0, the better the match. Every word the
        category has not seen costs roughly ``ln(K / total)``.

        Args:
            text: A document to score.

        Returns:
            ``{category: score}`` with one entry per category the store
            enumerates, in enumeration order. Empty if the store has no
            categories.

        Raises:
            BackendError: If the corpus store cannot be read.
        """
        word_counts = self.count_word_occurrences(text)
        return score_categories(word_counts, self._db, self.only_matched_words)

    def classify(self, text: str | bytes) -> str:
        """Return the most likely category for a document.

        Args:
            text: A document to classify.

        Returns:
            The winning category. ``""`` when the corpus has no
            categories; ``"unknown"`` when strict mode rejects them all.

        Raises:
            BackendError: If the corpus store cannot be read.
        """
        return self.explain(text).category

    def explain(self, text: str | bytes) -> ClassificationResult:
        """Classify a document and keep the full score breakdown.

        Tokenizes and scores once; ``result.category`` equals what
        ``classify`` returns for the same text.
        """
        word_counts = self.count_word_occurrences(text)
        scores = score_categories(word_counts, self._db, self.only_matched_words)
        category = select_category(scores, len(word_counts), self.only_matched_words)
        logger.debug(
            "Classified %d distinct words against %d categories as %r",
            len(word_counts), len(scores), category,
        )
        return ClassificationResult(
            category=category,
            scores=scores,
            word_counts=word_counts,
            only_matched_words=self.only_matched_words,
        )

    def __repr__(self) -> str:
        return (
            f"Classifier(corpus={self._db!r}, "
            f"only_matched_words={self.only_matched_words}, "
            f"skip_stemming={self.config.skip_stemming})"
        )
