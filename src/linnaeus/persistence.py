"""Corpus stores.

A corpus store is the read-only source of trained word counts. The
classifier needs exactly two operations from it:

- ``get_categories()`` -- the ordered list of known categories. The order
  decides which category wins a tie.
- ``get_words_with_count_for_category(category)`` -- the category's
  ``{word: count}`` table. Counts may be strings holding integers.

Three stores ship here: an in-memory one, a JSON file, and the Redis
key-value store the corpus is normally trained into.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable

import redis

from .errors import BackendError, ConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class CorpusStore(Protocol):
    """Read-only access to a trained corpus."""

    def get_categories(self) -> list[str]: ...

    def get_words_with_count_for_category(self, category: str) -> Mapping[str, Any]: ...


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class MemoryCorpus:
    """Corpus held in a plain dictionary.

    Categories are enumerated in the mapping's insertion order.

    Args:
        categories: ``{category: {word: count}}``. Copied on construction.
    """

    def __init__(self, categories: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._categories: dict[str, dict[str, Any]] = {
            str(category): dict(words) for category, words in (categories or {}).items()
        }

    def get_categories(self) -> list[str]:
        return list(self._categories)

    def get_words_with_count_for_category(self, category: str) -> dict[str, Any]:
        return dict(self._categories.get(category, {}))

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"MemoryCorpus(categories={list(self._categories)!r})"


# ---------------------------------------------------------------------------
# JSON file store
# ---------------------------------------------------------------------------


class JsonCorpus(MemoryCorpus):
    """Corpus loaded from a JSON file.

    Accepts either ``{"categories": {category: {word: count}}}`` or the
    bare ``{category: {word: count}}`` object. The file is read once.

    Args:
        path: Path to the JSON file.
        encoding: File encoding.

    Raises:
        BackendError: If the file is missing, unreadable or malformed.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        try:
            with open(self.path, "r", encoding=encoding) as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise BackendError(f"Cannot load corpus from {self.path}: {exc}") from exc

        if isinstance(data, dict) and isinstance(data.get("categories"), dict):
            data = data["categories"]
        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise BackendError(
                f"Malformed corpus in {self.path}: expected an object of "
                "{category: {word: count}}"
            )

        super().__init__(data)
        logger.debug("Loaded %d categories from %s", len(self), self.path)

    def __repr__(self) -> str:
        return f"JsonCorpus(path={str(self.path)!r})"


# ---------------------------------------------------------------------------
# Redis store
# ---------------------------------------------------------------------------


class RedisCorpus:
    """Corpus stored in Redis.

    Key layout::

        <prefix>[:<scope>]:category          SET of category names
        <prefix>[:<scope>]:cwc:<category>    HASH of word -> count

    Category names are returned sorted so tie-breaking does not depend on
    Redis' set iteration order.

    Args:
        host: Redis host.
        port: Redis port.
        db: Redis database number.
        prefix: Key namespace.
        scope: Optional sub-namespace, for several corpora in one database.
        client: Pre-built client; connection parameters are ignored when given.
        **redis_options: Passed through to ``redis.Redis``.

    Raises:
        ConfigurationError: If the connection parameters are malformed.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int | str = 6379,
        db: int | str = 0,
        prefix: str = "Linnaeus",
        scope: str | None = None,
        client: Any = None,
        **redis_options: Any,
    ) -> None:
        self.prefix = prefix
        self.scope = scope

        if client is not None:
            self._client = client
            return

        try:
            port = int(port)
            db = int(db)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Redis port and db must be integers, got port={port!r} db={db!r}"
            ) from exc
        if not host:
            raise ConfigurationError("Redis host must not be empty")

        try:
            self._client = redis.Redis(
                host=host, port=port, db=db, decode_responses=True, **redis_options
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid Redis connection options: {exc}") from exc

    @property
    def namespace(self) -> str:
        return f"{self.prefix}:{self.scope}" if self.scope else self.prefix

    def category_collection_key(self) -> str:
        return f"{self.namespace}:category"

    def category_word_count_key(self, category: str) -> str:
        return f"{self.namespace}:cwc:{category}"

    def get_categories(self) -> list[str]:
        try:
            members = self._client.smembers(self.category_collection_key())
        except redis.RedisError as exc:
            raise BackendError(f"Cannot read categories from Redis: {exc}") from exc
        return sorted(_as_text(m) for m in members)

    def get_words_with_count_for_category(self, category: str) -> dict[str, Any]:
        try:
            table = self._client.hgetall(self.category_word_count_key(category))
        except redis.RedisError as exc:
            raise BackendError(
                f"Cannot read word counts for category {category!r} from Redis: {exc}"
            ) from exc
        return {_as_text(word): _as_text(count) for word, count in table.items()}

    def __repr__(self) -> str:
        return f"RedisCorpus(namespace={self.namespace!r})"


def _as_text(value: Any) -> Any:
    """Decode bytes replies from clients built without ``decode_responses``."""
    return value.decode("utf-8") if isinstance(value, bytes) else value


_BACKENDS: dict[str, type] = {
    "memory": MemoryCorpus,
    "json": JsonCorpus,
    "redis": RedisCorpus,
}


def get_backend(name: str) -> type:
    """Look up a corpus store class by its short name.

    Raises:
        ConfigurationError: If the name is unknown.
    """
    try:
        return _BACKENDS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown persistence backend {name!r}. Known: {sorted(_BACKENDS)}"
        ) from None
