# kb_assistant/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kb_assistant.domain.errors import UnsupportedFormat


class ContentKind(str, Enum):
    """How raw content is laid out; each kind has its own chunking policy."""

    FREE_TEXT = "free_text"
    TABULAR = "tabular"

    @classmethod
    def parse(cls, value: ContentKind | str) -> ContentKind:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as ex:
            raise UnsupportedFormat(str(value)) from ex


@dataclass(frozen=True)
class Chunk:
    """
    Immutable unit of retrieval.

    - source_name: name of the originating document (unique per upload)
    - content:     bounded text payload, never empty
    - position:    0-based index among the chunks of the same source
    """

    source_name: str
    content: str
    position: int


@dataclass(frozen=True)
class ScoredChunk:
    """A chunk paired with its lexical relevance score (retrieval-internal)."""

    chunk: Chunk
    score: int


@dataclass(frozen=True)
class Citation:
    """Citation reference for a generated answer."""

    source: str
    position: int
