"""Stopword sources.

A stopword source is anything with a ``stopwords()`` method returning a set
of lower-case words. Tokens found in that set are discarded before counting.
Two implementations ship here: the built-in English list and a plain-text
file loader for custom lists.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

import redis

from .errors import BackendError


@runtime_checkable
class StopwordSource(Protocol):
    """Anything that can supply a stopword set."""

    def stopwords(self) -> set[str]: ...


ENGLISH_STOP_WORDS: frozenset[str] = frozenset({
    "a", "about", "above", "after", "again", "against", "all", "am", "an",
    "and", "any", "are", "aren't", "as", "at", "be", "because", "been",
    "before", "being", "below", "between", "both", "but", "by", "can",
    "can't", "cannot", "could", "couldn't", "did", "didn't", "do", "does",
    "doesn't", "doing", "don't", "down", "during", "each", "few", "for",
    "from", "further", "had", "hadn't", "has", "hasn't", "have", "haven't",
    "having", "he", "he'd", "he'll", "he's", "her", "here", "here's", "hers",
    "herself", "him", "himself", "his", "how", "how's", "i", "i'd", "i'll",
    "i'm", "i've", "if", "in", "into", "is", "isn't", "it", "it's", "its",
    "itself", "let's", "me", "more", "most", "mustn't", "my", "myself", "no",
    "nor", "not", "of", "off", "on", "once", "only", "or", "other", "ought",
    "our", "ours", "ourselves", "out", "over", "own", "same", "shan't",
    "she", "she'd", "she'll", "she's", "should", "shouldn't", "so", "some",
    "such", "than", "that", "that's", "the", "their", "theirs", "them",
    "themselves", "then", "there", "there's", "these", "they", "they'd",
    "they'll", "they're", "they've", "this", "those", "through", "to", "too",
    "under", "until", "up", "very", "was", "wasn't", "we", "we'd", "we'll",
    "we're", "we've", "were", "weren't", "what", "what's", "when", "when's",
    "where", "where's", "which", "while", "who", "who's", "whom", "why",
    "why's", "with", "won't", "would", "wouldn't", "you", "you'd", "you'll",
    "you're", "you've", "your", "yours", "yourself", "yourselves",
})


class EnglishStopwords:
    """Default stopword source backed by a built-in English word list."""

    def stopwords(self) -> set[str]:
        return set(ENGLISH_STOP_WORDS)


class FileStopwords:
    """Load stopwords from a text file, one word per line.

    Blank lines and lines starting with ``#`` are ignored. Words are
    lower-cased so they compare equal to normalized tokens.

    Args:
        path: Path to the word list.
        encoding: File encoding.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def stopwords(self) -> set[str]:
        """Read the word list.

        Raises:
            BackendError: If the file cannot be read or decoded.
        """
        try:
            content = self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise BackendError(f"Cannot read stopwords from {self.path}: {exc}") from exc

        words: set[str] = set()
        for line in content.splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                words.add(line.lower())
        return words


def load_stopwords(source: StopwordSource | type) -> set[str]:
    """Fetch the stopword set from a source class or instance.

    Raises:
        BackendError: If the source fails with an I/O or Redis error.
    """
    if isinstance(source, type):
        source = source()
    try:
        words = source.stopwords()
    except (OSError, redis.RedisError) as exc:
        raise BackendError(f"Cannot read stopwords: {exc}") from exc
    return {word.lower() for word in words}
