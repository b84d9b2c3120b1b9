# kb_assistant/domain/services/ranking.py
# Pure domain services: deterministic, no external libraries.
from __future__ import annotations

import logging
from collections.abc import Sequence

from kb_assistant.domain.errors import ValidationError
from kb_assistant.domain.models import Chunk, ScoredChunk
from kb_assistant.domain.services.relevance_scoring import (
    RetrievalParams,
    has_aggregation_intent,
    score_chunks,
)

logger = logging.getLogger(__name__)


def rank(scored: Sequence[ScoredChunk]) -> list[ScoredChunk]:
    """
    Drop zero scores and order by score descending.

    sorted() is stable, so equal scores keep their collection order
    (document/page order acts as the secondary key).
    """
    return sorted((s for s in scored if s.score > 0), key=lambda s: s.score, reverse=True)


def fallback(chunks: Sequence[Chunk], aggregation: bool, p: RetrievalParams) -> list[Chunk]:
    """Leading chunks in collection order, for queries without any lexical hit."""
    n = p.aggregation_fallback_limit if aggregation else p.fallback_limit
    return list(chunks[:n])


def select(
    query: str,
    chunks: Sequence[Chunk],
    limit: int | None = None,
    params: RetrievalParams | None = None,
) -> list[Chunk]:
    """
    Pick the chunks to hand to the answer step as grounding context.

    - aggregation intent over a small corpus: every chunk, unscored
    - otherwise: score, drop zeros, stable sort, cut to limit
      (limit * aggregation_limit_factor under aggregation intent)
    - nothing matched: leading chunks of the collection as fallback
    - empty collection: empty list

    Never raises for any query text, including "". A non-positive
    ``limit`` raises ValidationError.
    """
    p = params or RetrievalParams()
    limit = p.limit if limit is None else limit
    if limit <= 0:
        raise ValidationError("limit must be > 0")
    if not chunks:
        return []

    aggregation = has_aggregation_intent(query, p.aggregation_keywords)
    if aggregation and len(chunks) < p.small_corpus_threshold:
        logger.info("Aggregation detected for small corpus (%d chunks); returning all", len(chunks))
        return list(chunks)

    bound = limit * p.aggregation_limit_factor if aggregation else limit
    selected = [s.chunk for s in rank(score_chunks(query, chunks, p))[:bound]]
    if selected:
        logger.debug(
            "Selected %d of %d chunks (aggregation=%s)", len(selected), len(chunks), aggregation
        )
        return selected

    logger.info("No keyword matches found; falling back to leading chunks")
    return fallback(chunks, aggregation, p)
