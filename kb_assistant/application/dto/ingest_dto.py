from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..ports.document_loader_port import DocumentPayload


@dataclass(frozen=True)
class IngestRequest:
    paths: Sequence[str] = ()  # Pfade zu den Quellen (PDF/TXT/CSV)
    # Already extracted content, ingested after the paths
    payloads: Sequence[DocumentPayload] = ()


@dataclass
class IngestReport:
    """Outcome of one batch upload, one entry per input file."""

    ingested: list[tuple[str, int]] = field(default_factory=list)  # (source_name, chunks)
    skipped: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)  # (source_name, message)

    @property
    def total_chunks(self) -> int:
        return sum(n for _, n in self.ingested)
