"""Linnaeus -- classify documents against a trained word-frequency corpus."""

__version__ = "1.0.0"

from .classifier import Classifier
from .config import DEFAULT_CONFIG, ClassifierConfig
from .decision import (
    EMPTY_LABEL,
    UNKNOWN_CATEGORY,
    filter_matched,
    rank_scores,
    select_category,
)
from .errors import BackendError, ConfigurationError, LinnaeusError
from .models import ClassificationResult
from .persistence import CorpusStore, JsonCorpus, MemoryCorpus, RedisCorpus, get_backend
from .scoring import (
    SMOOTHING,
    STRICT_SMOOTHING,
    log_ratio,
    score_categories,
    score_category,
)
from .stopwords import EnglishStopwords, FileStopwords, StopwordSource, load_stopwords
from .tokenizer import Stemmer, WordTokenizer

__all__ = [
    # Core
    "Classifier",
    "ClassificationResult",
    "ClassifierConfig",
    "DEFAULT_CONFIG",
    # Errors
    "LinnaeusError",
    "ConfigurationError",
    "BackendError",
    # Corpus stores
    "CorpusStore",
    "MemoryCorpus",
    "JsonCorpus",
    "RedisCorpus",
    "get_backend",
    # Text normalization
    "WordTokenizer",
    "Stemmer",
    "StopwordSource",
    "EnglishStopwords",
    "FileStopwords",
    "load_stopwords",
    # Scoring and decision
    "SMOOTHING",
    "STRICT_SMOOTHING",
    "log_ratio",
    "score_category",
    "score_categories",
    "EMPTY_LABEL",
    "UNKNOWN_CATEGORY",
    "filter_matched",
    "rank_scores",
    "select_category",
]
