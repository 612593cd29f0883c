"""Text normalization into per-document word counts.

Turns raw text into a ``{word: occurrences}`` mapping:

1. Encoding normalization (decode bytes / coerce into the configured
   charset, then NFC unicode normalization)
2. Splitting on whitespace and punctuation boundaries
3. Lower-casing
4. Stopword removal
5. Porter stemming (optional)
6. Counting
"""

from __future__ import annotations

import re
import unicodedata
from collections import Counter
from typing import Iterable, Protocol, runtime_checkable

from nltk.stem import PorterStemmer


@runtime_checkable
class Stemmer(Protocol):
    """Anything that reduces a word to its stem."""

    def stem(self, word: str) -> str: ...


# Letter/digit runs, optionally joined by inner apostrophes ("don't").
_WORD_RE = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


def default_stemmer() -> Stemmer:
    """Return the stemmer used when none is configured."""
    return PorterStemmer()


class WordTokenizer:
    """Convert documents into word-occurrence counts.

    Example::

        tokenizer = WordTokenizer(stopwords={"the"}, skip_stemming=True)
        tokenizer.count_word_occurrences("The ball, the game. Ball!")
        # {"ball": 2, "game": 1}

    Args:
        stopwords: Lower-case words discarded before stemming.
        stemmer: Object with a ``stem(word)`` method. Defaults to NLTK's
            Porter stemmer.
        skip_stemming: Count surface forms instead of stems.
        encoding: Character encoding the input is normalized to.
    """

    def __init__(
        self,
        stopwords: Iterable[str] = (),
        stemmer: Stemmer | None = None,
        skip_stemming: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self.stopwords = frozenset(stopwords)
        self.skip_stemming = skip_stemming
        self.encoding = encoding
        self._stemmer = None if skip_stemming else (stemmer or default_stemmer())

    def normalize(self, text: str | bytes) -> str:
        """Bring input text into the configured encoding, NFC-normalized."""
        if isinstance(text, bytes):
            text = text.decode(self.encoding, errors="replace")
        else:
            text = text.encode(self.encoding, errors="replace").decode(
                self.encoding, errors="replace"
            )
        text = unicodedata.normalize("NFC", text)
        return text.replace("’", "'")

    def tokenize(self, text: str | bytes) -> list[str]:
        """Split text into lower-case word tokens (no stopword removal)."""
        if not text:
            return []
        normalized = self.normalize(text)
        return [m.group().lower() for m in _WORD_RE.finditer(normalized)]

    def count_word_occurrences(self, text: str | bytes) -> dict[str, int]:
        """Count the surviving (stemmed) tokens of a single document.

        Args:
            text: Raw document text.

        Returns:
            Mapping of normalized word to occurrence count. Words that do
            not occur are absent rather than zero.
        """
        counts: Counter[str] = Counter()
        for token in self.tokenize(text):
            if token in self.stopwords:
                continue
            if self._stemmer is not None:
                token = self._stemmer.stem(token)
            counts[token] += 1
        return dict(counts)
