"""Application settings with environment-driven configuration.

Why: Einzige Stelle mit Env; the retrieval heuristics are policy constants
     with reference defaults, not fixed law.
"""

import os
from dataclasses import dataclass, field

from kb_assistant.domain.services.chunking import ChunkingParams
from kb_assistant.domain.services.relevance_scoring import AGGREGATION_KEYWORDS, RetrievalParams


def _csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(k.strip().lower() for k in raw.split(",") if k.strip())


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    All other layers receive settings via dependency injection.
    """

    # ===== Chunking =====
    text_chunk_size: int = field(
        default_factory=lambda: int(os.getenv("TEXT_CHUNK_SIZE", "4000"))
    )
    rows_per_chunk: int = field(default_factory=lambda: int(os.getenv("ROWS_PER_CHUNK", "30")))
    csv_delimiter: str = field(default_factory=lambda: os.getenv("CSV_DELIMITER", ","))

    # ===== Retrieval =====
    retrieval_limit: int = field(default_factory=lambda: int(os.getenv("RETRIEVAL_LIMIT", "30")))
    small_corpus_threshold: int = field(
        default_factory=lambda: int(os.getenv("SMALL_CORPUS_THRESHOLD", "50"))
    )
    exact_phrase_bonus: int = field(
        default_factory=lambda: int(os.getenv("EXACT_PHRASE_BONUS", "10"))
    )
    fallback_limit: int = field(default_factory=lambda: int(os.getenv("FALLBACK_LIMIT", "5")))
    aggregation_fallback_limit: int = field(
        default_factory=lambda: int(os.getenv("AGGREGATION_FALLBACK_LIMIT", "20"))
    )
    aggregation_keywords: tuple[str, ...] = field(
        default_factory=lambda: _csv_env("AGGREGATION_KEYWORDS", AGGREGATION_KEYWORDS)
    )

    # ===== Conversation =====
    history_window: int = field(default_factory=lambda: int(os.getenv("HISTORY_WINDOW", "5")))

    # ===== LLM Configuration =====
    llm_base_url: str = field(default_factory=lambda: os.getenv("LLM_BASE_URL", ""))
    # Empty string = official OpenAI endpoint
    llm_api_key: str = field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", "EMPTY"))
    )
    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    llm_temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.7"))
    )

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def chunking_params(self) -> ChunkingParams:
        return ChunkingParams(
            text_chunk_size=self.text_chunk_size,
            rows_per_chunk=self.rows_per_chunk,
            csv_delimiter=self.csv_delimiter,
        )

    def retrieval_params(self) -> RetrievalParams:
        return RetrievalParams(
            limit=self.retrieval_limit,
            aggregation_keywords=self.aggregation_keywords,
            small_corpus_threshold=self.small_corpus_threshold,
            exact_phrase_bonus=self.exact_phrase_bonus,
            fallback_limit=self.fallback_limit,
            aggregation_fallback_limit=self.aggregation_fallback_limit,
        )
