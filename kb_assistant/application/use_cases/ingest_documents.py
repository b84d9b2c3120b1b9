from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

from ...domain.errors import DomainError, DuplicateSource, UnsupportedFormat
from ...domain.services.chunking import ChunkingParams, chunk
from ..dto.ingest_dto import IngestReport, IngestRequest
from ..knowledge_base import KnowledgeBase
from ..ports.document_loader_port import DocumentLoaderPort, DocumentPayload

logger = logging.getLogger(__name__)


def source_name_for(path: str) -> str:
    return os.path.basename(path)


def extension_of(path: str) -> str:
    return os.path.splitext(path)[1].lower().lstrip(".")


@dataclass
class IngestDocuments:
    """Batch upload: load, chunk and register each source in the knowledge base.

    Sources are files (``req.paths``, loaded by extension) or already
    extracted payloads (``req.payloads``). Names that are already indexed are
    skipped silently. A failing source is reported and leaves no chunks
    behind; the rest of the batch continues.
    """

    knowledge_base: KnowledgeBase
    loaders: Mapping[str, DocumentLoaderPort]  # by lower-case file extension
    params: ChunkingParams = field(default_factory=ChunkingParams)

    def execute(self, req: IngestRequest) -> IngestReport:
        report = IngestReport()
        for name, load in self._sources(req):
            if self.knowledge_base.contains(name):
                logger.info("Skipping '%s': already indexed", name)
                report.skipped.append(name)
                continue
            try:
                n = self._ingest_one(name, load)
            except DuplicateSource:
                # Lost a race against a concurrent upload of the same name.
                report.skipped.append(name)
            except DomainError as ex:
                logger.warning("Failed to ingest '%s': %s", name, ex)
                report.failed.append((name, str(ex)))
            else:
                logger.info("Ingested '%s' (%d chunks)", name, n)
                report.ingested.append((name, n))
        return report

    def _sources(self, req: IngestRequest) -> Iterator[tuple[str, Callable[[], DocumentPayload]]]:
        for path in req.paths:
            yield source_name_for(path), lambda path=path: self._load(path)
        for payload in req.payloads:
            yield payload.source_name, lambda payload=payload: payload

    def _load(self, path: str) -> DocumentPayload:
        # Loader nach Dateiendung
        ext = extension_of(path)
        loader = self.loaders.get(ext)
        if loader is None:
            supported = ", ".join(sorted(self.loaders)).upper()
            raise UnsupportedFormat(ext or source_name_for(path), f"Please upload {supported}.")
        return loader.load(path)

    def _ingest_one(self, name: str, load: Callable[[], DocumentPayload]) -> int:
        payload = load()

        # Chunken (pure Domain); nothing is stored before this succeeds
        chunks = chunk(name, payload.kind, payload.content, self.params)

        # Atomar in die Knowledge Base
        self.knowledge_base.add(name, chunks)
        return len(chunks)
