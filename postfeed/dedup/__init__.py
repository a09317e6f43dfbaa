"""
Deduplication module - novelty guard for generated posts.
"""

from .novelty import (
    DEFAULT_COSINE_THRESHOLD,
    DEFAULT_HINT,
    DEFAULT_JACCARD_THRESHOLD,
    DEFAULT_WINDOW,
    STOP_WORDS,
    NoveltyConfig,
    NoveltyGuard,
    NoveltyVerdict,
    cosine,
    evaluate,
    frequency,
    jaccard,
    ngrams,
    strip_markup,
    tokenize,
)

__all__ = [
    "DEFAULT_COSINE_THRESHOLD",
    "DEFAULT_HINT",
    "DEFAULT_JACCARD_THRESHOLD",
    "DEFAULT_WINDOW",
    "STOP_WORDS",
    "NoveltyConfig",
    "NoveltyGuard",
    "NoveltyVerdict",
    "cosine",
    "evaluate",
    "frequency",
    "jaccard",
    "ngrams",
    "strip_markup",
    "tokenize",
]
