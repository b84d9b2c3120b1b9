"""Session knowledge base: append-only chunk collection plus ingested names.

Why: Explicit state object handed to the use cases instead of a module global;
     one lock makes every mutation and every snapshot atomic.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from kb_assistant.domain.errors import DuplicateSource, ValidationError
from kb_assistant.domain.models import Chunk


class KnowledgeBase:
    """Ordered chunks of all ingested sources, kept for the process lifetime.

    Chunks are never mutated or removed individually; ``reset`` drops
    everything at once.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._chunks: tuple[Chunk, ...] = ()
        self._names: dict[str, None] = {}  # insertion-ordered set

    def add(self, source_name: str, chunks: Sequence[Chunk]) -> None:
        """Register ``source_name`` and append its chunks (all or nothing).

        A source may contribute zero chunks; its name is still registered.

        Raises:
            DuplicateSource: the name is already registered.
            ValidationError: a chunk belongs to another source or positions
                are not exactly 0..n-1.
        """
        if not source_name:
            raise ValidationError("source_name must not be empty")
        for expected, c in enumerate(chunks):
            if c.source_name != source_name:
                raise ValidationError(
                    f"chunk from '{c.source_name}' cannot be added under '{source_name}'"
                )
            if c.position != expected:
                raise ValidationError(
                    f"'{source_name}': expected position {expected}, got {c.position}"
                )

        with self._lock:
            if source_name in self._names:
                raise DuplicateSource(source_name)
            # Swap in a new tuple so snapshots already handed out stay valid.
            self._chunks = self._chunks + tuple(chunks)
            self._names[source_name] = None

    def contains(self, source_name: str) -> bool:
        with self._lock:
            return source_name in self._names

    def snapshot(self) -> tuple[Chunk, ...]:
        """Consistent, immutable view of all chunks in insertion order."""
        with self._lock:
            return self._chunks

    @property
    def source_names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._names)

    def reset(self) -> None:
        with self._lock:
            self._chunks = ()
            self._names = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)
