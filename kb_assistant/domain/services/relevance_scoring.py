from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from kb_assistant.domain.errors import ValidationError
from kb_assistant.domain.models import Chunk, ScoredChunk

_NON_WORD = re.compile(r"\W+")

AGGREGATION_KEYWORDS: tuple[str, ...] = (
    "total",
    "count",
    "sum",
    "average",
    "summary",
    "report",
    "analyze",
    "overview",
    "all",
)


@dataclass(frozen=True)
class RetrievalParams:
    limit: int = 30
    aggregation_keywords: tuple[str, ...] = AGGREGATION_KEYWORDS
    small_corpus_threshold: int = 50
    exact_phrase_bonus: int = 10
    aggregation_limit_factor: int = 2
    fallback_limit: int = 5
    aggregation_fallback_limit: int = 20
    min_term_length: int = 3

    def __post_init__(self) -> None:
        if self.limit <= 0 or self.aggregation_limit_factor <= 0:
            raise ValidationError("limit and aggregation_limit_factor must be > 0")
        if min(self.fallback_limit, self.aggregation_fallback_limit, self.small_corpus_threshold) < 0:
            raise ValidationError("fallback limits and small_corpus_threshold must be >= 0")


def tokenize(query: str, min_length: int = 3) -> list[str]:
    """Lower-cased terms of ``query``; duplicates are kept on purpose."""
    return [t for t in _NON_WORD.split(query.lower()) if len(t) >= min_length]


def has_aggregation_intent(query: str, keywords: Iterable[str] = AGGREGATION_KEYWORDS) -> bool:
    """True if any keyword occurs anywhere in the query ("overall" counts for "all")."""
    q = query.lower()
    return any(k in q for k in keywords)


def score_chunk(chunk: Chunk, query: str, terms: Sequence[str], bonus: int = 10) -> int:
    """Exact-phrase bonus plus one point per term found in the content.

    Each term is checked once, so repeated occurrences inside the chunk do
    not add up; a term repeated in the query does.
    """
    content = chunk.content.lower()
    phrase = query.lower()
    score = 0
    if phrase and phrase in content:
        score += bonus
    for term in terms:
        if term in content:
            score += 1
    return score


def score_chunks(
    query: str, chunks: Sequence[Chunk], params: RetrievalParams | None = None
) -> list[ScoredChunk]:
    p = params or RetrievalParams()
    terms = tokenize(query, p.min_term_length)
    return [
        ScoredChunk(chunk=c, score=score_chunk(c, query, terms, p.exact_phrase_bonus))
        for c in chunks
    ]
