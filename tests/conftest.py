"""Shared test fixtures for linnaeus tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import redis

from linnaeus import Classifier, ClassifierConfig, MemoryCorpus


SPORTS_POLITICS = {
    "sports": {"ball": 10, "game": 5},
    "politics": {"vote": 8, "law": 2},
}


class FakeRedis:
    """Just enough of a Redis client for the corpus store."""

    def __init__(self, sets=None, hashes=None, fail=False):
        self.sets = sets or {}
        self.hashes = hashes or {}
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    def smembers(self, key):
        self.calls.append(("smembers", key))
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return set(self.sets.get(key, set()))

    def hgetall(self, key):
        self.calls.append(("hgetall", key))
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return dict(self.hashes.get(key, {}))


@pytest.fixture
def corpus() -> MemoryCorpus:
    """Two-category corpus used throughout the scoring tests."""
    return MemoryCorpus(SPORTS_POLITICS)


@pytest.fixture
def plain_config() -> ClassifierConfig:
    """Non-strict config without stemming, so test words stay literal."""
    return ClassifierConfig(skip_stemming=True)


@pytest.fixture
def strict_config(plain_config: ClassifierConfig) -> ClassifierConfig:
    return plain_config.with_options(only_matched_words=True)


@pytest.fixture
def classifier(plain_config: ClassifierConfig, corpus: MemoryCorpus) -> Classifier:
    return Classifier(plain_config, corpus=corpus)


@pytest.fixture
def strict_classifier(strict_config: ClassifierConfig, corpus: MemoryCorpus) -> Classifier:
    return Classifier(strict_config, corpus=corpus)


@pytest.fixture
def corpus_file(tmp_path: Path) -> Path:
    """JSON corpus file holding the sports/politics corpus."""
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps({"categories": SPORTS_POLITICS}), encoding="utf-8")
    return path


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Fake client pre-loaded with the sports/politics corpus (string counts)."""
    return FakeRedis(
        sets={"Linnaeus:category": {"sports", "politics"}},
        hashes={
            "Linnaeus:cwc:sports": {"ball": "10", "game": "5"},
            "Linnaeus:cwc:politics": {"vote": "8", "law": "2"},
        },
    )


_ENV_VARS = [
    "LINNAEUS_BACKEND",
    "LINNAEUS_REDIS_HOST",
    "LINNAEUS_REDIS_PORT",
    "LINNAEUS_REDIS_DB",
    "LINNAEUS_REDIS_PASSWORD",
    "LINNAEUS_REDIS_PREFIX",
    "LINNAEUS_SCOPE",
    "LINNAEUS_CORPUS_PATH",
    "LINNAEUS_SKIP_STEMMING",
    "LINNAEUS_ENCODING",
    "LINNAEUS_ONLY_MATCHED_WORDS",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Environment without LINNAEUS_* variables and no stray .env file."""
    for var in _ENV_VARS:
        # setenv first so the prior state is restored after the test,
        # including variables a .env file loads
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
