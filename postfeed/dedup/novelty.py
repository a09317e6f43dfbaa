"""
Novelty guard for generated posts.

Decides whether a candidate text is a near-duplicate of any recent post using
two independent signals:

1. Cosine similarity of term-frequency vectors (word distribution overlap)
2. Jaccard similarity of token trigram sets (phrase-level overlap)

A candidate is rejected as soon as ONE reference exceeds EITHER threshold.
The guard is pure: it reads its inputs, builds local working structures and
returns an immutable verdict. It never raises on degenerate input.
"""

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from postfeed.infra.env import get_env_float, get_env_int

logger = logging.getLogger("postfeed")

# =============================================================================
# Policy constants
# =============================================================================

DEFAULT_COSINE_THRESHOLD = 0.78
DEFAULT_JACCARD_THRESHOLD = 0.32
DEFAULT_NGRAM_SIZE = 3
DEFAULT_WINDOW = 15

DEFAULT_HINT = (
    "Change structure and examples; focus on a different facet "
    "(policy, ROI, or onboarding). Avoid repeating phrases."
)

STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "a", "and", "or", "but", "if", "then", "to", "of", "in", "on",
    "for", "at", "is", "are", "be", "as", "it", "that", "this", "with", "by",
    "an", "from", "we", "you", "i",
})

_TAG_RE = re.compile(r"<[^>]+>")
_MARKDOWN_MARKER_RE = re.compile(r"[#*_`~>]")
_NON_WORD_RE = re.compile(r"[^\w\s]")


# =============================================================================
# Tokenization
# =============================================================================

def strip_markup(text: str) -> str:
    """Replace every tag-like ``<...>`` span with a space."""
    return _TAG_RE.sub(" ", text or "")


def tokenize(text: str, stop_words: Iterable[str] = STOP_WORDS) -> List[str]:
    """
    Normalize text into an ordered list of tokens.

    Steps, in order: lowercase, blank out markdown markers (# * _ ` ~ >),
    blank out remaining punctuation, split on whitespace, drop stop words.

    Args:
        text: Raw text, markup already stripped
        stop_words: Words excluded from the output

    Returns:
        List[str]: Tokens in original order (may be empty)

    Example:
        >>> tokenize("## The *Agentic* AI, for workflows!")
        ['agentic', 'ai', 'workflows']
    """
    stop = stop_words if isinstance(stop_words, (set, frozenset)) else set(stop_words)
    lowered = (text or "").lower()
    lowered = _MARKDOWN_MARKER_RE.sub(" ", lowered)
    lowered = _NON_WORD_RE.sub(" ", lowered)
    return [token for token in lowered.split() if token and token not in stop]


# =============================================================================
# Similarity measures
# =============================================================================

def frequency(tokens: Iterable[str]) -> Counter:
    """Count occurrences of each distinct token."""
    return Counter(tokens)


def cosine(tokens_a: Sequence[str], tokens_b: Sequence[str]) -> float:
    """
    Cosine similarity between the term-frequency vectors of two token sequences.

    Terms from either side are considered; a term missing on one side counts
    as zero. An empty vector gives a zero norm, in which case the denominator
    is floored to 1 and the score is 0.0.

    Returns:
        float: Score in [0.0, 1.0]
    """
    freq_a = frequency(tokens_a)
    freq_b = frequency(tokens_b)

    dot = 0
    # Sorted so that cosine(a, b) and cosine(b, a) sum in the same order
    for term in sorted(set(freq_a) | set(freq_b)):
        dot += freq_a.get(term, 0) * freq_b.get(term, 0)

    norm_a = math.sqrt(sum(count * count for count in freq_a.values()))
    norm_b = math.sqrt(sum(count * count for count in freq_b.values()))

    denominator = (norm_a * norm_b) or 1
    return min(1.0, dot / denominator)


def ngrams(tokens: Sequence[str], n: int = DEFAULT_NGRAM_SIZE) -> Set[str]:
    """
    Build the set of contiguous n-token phrases.

    Each phrase is the n tokens joined by a single space. Sequences shorter
    than n produce an empty set.
    """
    if n < 1:
        return set()
    tokens = list(tokens)
    return {" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)}


def jaccard(set_a: Set[str], set_b: Set[str]) -> float:
    """|A & B| / |A | B|, with an empty union scored as 0.0."""
    union = len(set_a | set_b)
    return len(set_a & set_b) / (union or 1)


# =============================================================================
# Configuration and verdict
# =============================================================================

@dataclass(frozen=True)
class NoveltyConfig:
    """
    Immutable guard policy.

    Attributes:
        cosine_threshold: Reject when cosine similarity is strictly above this
        jaccard_threshold: Reject when trigram Jaccard is strictly above this
        ngram_size: Phrase length used for the Jaccard signal
        window: Maximum number of reference texts compared
        hint: Regeneration guidance returned with a rejection
        stop_words: Words removed by the tokenizer
    """
    cosine_threshold: float = DEFAULT_COSINE_THRESHOLD
    jaccard_threshold: float = DEFAULT_JACCARD_THRESHOLD
    ngram_size: int = DEFAULT_NGRAM_SIZE
    window: int = DEFAULT_WINDOW
    hint: str = DEFAULT_HINT
    stop_words: FrozenSet[str] = field(default=STOP_WORDS)

    @classmethod
    def from_env(cls) -> "NoveltyConfig":
        """
        Build a config from environment variables.

        - NOVELTY_COSINE_THRESHOLD (default 0.78)
        - NOVELTY_JACCARD_THRESHOLD (default 0.32)
        - NOVELTY_NGRAM_SIZE (default 3)
        - NOVELTY_WINDOW (default 15)
        """
        return cls(
            cosine_threshold=get_env_float("NOVELTY_COSINE_THRESHOLD", DEFAULT_COSINE_THRESHOLD),
            jaccard_threshold=get_env_float("NOVELTY_JACCARD_THRESHOLD", DEFAULT_JACCARD_THRESHOLD),
            ngram_size=get_env_int("NOVELTY_NGRAM_SIZE", DEFAULT_NGRAM_SIZE),
            window=get_env_int("NOVELTY_WINDOW", DEFAULT_WINDOW),
        )


@dataclass(frozen=True)
class NoveltyVerdict:
    """
    Result of one novelty evaluation.

    Attributes:
        accepted: True if no reference exceeded either threshold
        hint: Regeneration guidance, set only on rejection
        cosine: Cosine score of the rejecting reference, or the highest seen
        jaccard: Jaccard score of the rejecting reference, or the highest seen
        reference_index: Position of the rejecting reference, None when accepted
    """
    accepted: bool
    hint: Optional[str] = None
    cosine: float = 0.0
    jaccard: float = 0.0
    reference_index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.accepted

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "accepted": self.accepted,
            "hint": self.hint,
            "cosine": round(self.cosine, 4),
            "jaccard": round(self.jaccard, 4),
            "reference_index": self.reference_index,
        }


# =============================================================================
# Guard
# =============================================================================

class NoveltyGuard:
    """
    Near-duplicate predicate over a window of recent texts.

    Stateless apart from its immutable config, so one instance may be shared
    freely between callers.

    Usage:
        guard = NoveltyGuard()
        verdict = guard.evaluate(candidate, recent_posts)
        if not verdict.accepted:
            regenerate(verdict.hint)
    """

    def __init__(self, config: Optional[NoveltyConfig] = None):
        self.config = config or NoveltyConfig()

    def _tokens(self, text: str) -> List[str]:
        return tokenize(strip_markup(text), self.config.stop_words)

    def evaluate(self, candidate: str, references: Sequence[str]) -> NoveltyVerdict:
        """
        Check a candidate against reference texts in order.

        Stops at the first reference whose cosine OR Jaccard score exceeds its
        threshold. References past the configured window are ignored.

        Args:
            candidate: Newly generated text (plain or lightly marked up)
            references: Prior texts, most recent first

        Returns:
            NoveltyVerdict: Rejection with hint, or acceptance without one
        """
        config = self.config
        window = list(references)[:max(config.window, 0)]

        candidate_tokens = self._tokens(candidate)
        candidate_grams = ngrams(candidate_tokens, config.ngram_size)

        best_cosine = 0.0
        best_jaccard = 0.0

        for index, reference in enumerate(window):
            reference_tokens = self._tokens(reference)
            cos_score = cosine(candidate_tokens, reference_tokens)
            jac_score = jaccard(candidate_grams, ngrams(reference_tokens, config.ngram_size))

            logger.debug(
                f"[Novelty] ref={index} cosine={cos_score:.3f} jaccard={jac_score:.3f}"
            )

            if cos_score > config.cosine_threshold or jac_score > config.jaccard_threshold:
                logger.info(
                    f"[Novelty] REJECT against reference {index} "
                    f"(cosine={cos_score:.3f}, jaccard={jac_score:.3f})"
                )
                return NoveltyVerdict(
                    accepted=False,
                    hint=config.hint,
                    cosine=cos_score,
                    jaccard=jac_score,
                    reference_index=index,
                )

            best_cosine = max(best_cosine, cos_score)
            best_jaccard = max(best_jaccard, jac_score)

        logger.info(
            f"[Novelty] ACCEPT against {len(window)} references "
            f"(max cosine={best_cosine:.3f}, max jaccard={best_jaccard:.3f})"
        )
        return NoveltyVerdict(accepted=True, cosine=best_cosine, jaccard=best_jaccard)

    __call__ = evaluate


def evaluate(
    candidate: str,
    references: Sequence[str],
    config: Optional[NoveltyConfig] = None
) -> NoveltyVerdict:
    """Evaluate a candidate with a one-off guard (default policy if no config)."""
    return NoveltyGuard(config).evaluate(candidate, references)
