"""Classifier configuration.

All options live on one explicit, immutable ``ClassifierConfig``.
``DEFAULT_CONFIG`` is the only set of defaults; override it field by field::

    config = DEFAULT_CONFIG.with_options(only_matched_words=True)

or build one from ``LINNAEUS_*`` environment variables (and an optional
``.env`` file) with ``ClassifierConfig.from_env()``.
"""

from __future__ import annotations

import codecs
import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError
from .persistence import JsonCorpus, RedisCorpus, get_backend
from .stopwords import EnglishStopwords
from .tokenizer import Stemmer

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _default_backend_options() -> dict[str, Any]:
    return {"host": "127.0.0.1", "port": 6379, "db": 0}


@dataclass(frozen=True)
class ClassifierConfig:
    """Options recognised by ``Classifier``.

    Attributes:
        persistence_backend: Corpus store factory, called with
            ``backend_options`` as keyword arguments.
        backend_options: Connection parameters passed through to the
            backend untouched.
        stopword_source: Stopword source class or instance.
        skip_stemming: Count surface forms instead of Porter stems.
        stemmer: Custom stemmer; ``None`` selects the Porter stemmer.
        text_encoding: Encoding input text is normalized to.
        only_matched_words: Strict mode. Unmatched words get a much smaller
            smoothing count and poorly matched categories are filtered out.
    """

    persistence_backend: Callable[..., Any] = RedisCorpus
    backend_options: dict[str, Any] = field(default_factory=_default_backend_options)
    stopword_source: Any = EnglishStopwords
    skip_stemming: bool = False
    stemmer: Optional[Stemmer] = None
    text_encoding: str = "utf-8"
    only_matched_words: bool = False

    # backend_options is a dict, so field-wise hashing cannot work
    __hash__ = None  # type: ignore[assignment]

    def with_options(self, **changes: Any) -> "ClassifierConfig":
        """Return a copy with the given fields replaced.

        Raises:
            ConfigurationError: If a field name is unknown.
        """
        try:
            return dataclasses.replace(self, **changes)
        except TypeError as exc:
            raise ConfigurationError(f"Unknown configuration option: {exc}") from exc

    def validate(self) -> None:
        """Check option values that can be verified without I/O.

        Raises:
            ConfigurationError: On an unknown encoding or a non-callable
                backend factory.
        """
        try:
            codecs.lookup(self.text_encoding)
        except (LookupError, TypeError) as exc:
            raise ConfigurationError(f"Unknown text encoding {self.text_encoding!r}") from exc
        if not callable(self.persistence_backend):
            raise ConfigurationError(
                f"persistence_backend must be callable, got {self.persistence_backend!r}"
            )
        if not isinstance(self.backend_options, dict):
            raise ConfigurationError("backend_options must be a dict")

    @classmethod
    def from_env(
        cls,
        env_file: str | Path | None = None,
        base: "ClassifierConfig | None" = None,
    ) -> "ClassifierConfig":
        """Build a configuration from ``LINNAEUS_*`` environment variables.

        Variables already present in the environment take precedence over
        the ``.env`` file.

        Args:
            env_file: Optional path to a ``.env`` file.
            base: Configuration to start from (``DEFAULT_CONFIG`` if omitted).

        Returns:
            A new ClassifierConfig.

        Raises:
            ConfigurationError: If a variable holds a malformed value.
        """
        load_dotenv(env_file if env_file is not None else find_dotenv(usecwd=True))

        config = base or DEFAULT_CONFIG
        changes: dict[str, Any] = {}

        backend_name = os.getenv("LINNAEUS_BACKEND")
        if backend_name:
            backend = get_backend(backend_name)
            changes["persistence_backend"] = backend
            changes["backend_options"] = _backend_options_from_env(backend)
        elif config.persistence_backend is RedisCorpus:
            changes["backend_options"] = _backend_options_from_env(RedisCorpus)

        if "LINNAEUS_SKIP_STEMMING" in os.environ:
            changes["skip_stemming"] = _parse_bool(
                "LINNAEUS_SKIP_STEMMING", os.environ["LINNAEUS_SKIP_STEMMING"]
            )
        if "LINNAEUS_ONLY_MATCHED_WORDS" in os.environ:
            changes["only_matched_words"] = _parse_bool(
                "LINNAEUS_ONLY_MATCHED_WORDS", os.environ["LINNAEUS_ONLY_MATCHED_WORDS"]
            )
        if os.getenv("LINNAEUS_ENCODING"):
            changes["text_encoding"] = os.environ["LINNAEUS_ENCODING"]

        return config.with_options(**changes)


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _backend_options_from_env(backend: type) -> dict[str, Any]:
    if backend is RedisCorpus:
        options = _default_backend_options()
        env_map = {
            "LINNAEUS_REDIS_HOST": "host",
            "LINNAEUS_REDIS_PORT": "port",
            "LINNAEUS_REDIS_DB": "db",
            "LINNAEUS_REDIS_PASSWORD": "password",
            "LINNAEUS_REDIS_PREFIX": "prefix",
            "LINNAEUS_SCOPE": "scope",
        }
        for var, key in env_map.items():
            value = os.getenv(var)
            if value:
                options[key] = value
        for key in ("port", "db"):
            try:
                options[key] = int(options[key])
            except ValueError as exc:
                raise ConfigurationError(
                    f"Redis {key} must be an integer, got {options[key]!r}"
                ) from exc
        return options

    if backend is JsonCorpus:
        path = os.getenv("LINNAEUS_CORPUS_PATH")
        if not path:
            raise ConfigurationError("LINNAEUS_CORPUS_PATH is required for the json backend")
        return {"path": path}

    return {}


DEFAULT_CONFIG = ClassifierConfig()
