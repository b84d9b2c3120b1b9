from __future__ import annotations

import os
from dataclasses import dataclass

from kb_assistant.application.ports.document_loader_port import DocumentLoaderPort, DocumentPayload
from kb_assistant.domain.errors import DocumentError
from kb_assistant.domain.models import ContentKind


@dataclass
class PlainTextLoaderAdapter(DocumentLoaderPort):
    encoding: str = "utf-8"

    def load(self, path: str) -> DocumentPayload:  # type: ignore[override]
        try:
            with open(path, encoding=self.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as ex:
            raise DocumentError(f"TXT load failed: {ex}") from ex
        return DocumentPayload(
            source_name=os.path.basename(path),
            kind=ContentKind.FREE_TEXT,
            content=text,
            source_path=path,
        )


@dataclass
class PDFTextExtractorAdapter(DocumentLoaderPort):
    """Page text joined in page order, each page introduced by a marker line."""

    def load(self, path: str) -> DocumentPayload:  # type: ignore[override]
        try:
            from pypdf import PdfReader  # lazy import to avoid hard dependency in tests
        except ImportError as ex:  # pragma: no cover
            raise DocumentError("pypdf is not installed") from ex

        try:
            reader = PdfReader(path)
            parts: list[str] = []
            for i, page in enumerate(reader.pages, start=1):
                # Words on a page are joined with single spaces
                words = " ".join((page.extract_text() or "").split())
                parts.append(f"--- Page {i} ---\n{words}\n\n")
        except Exception as ex:  # noqa: BLE001
            raise DocumentError(f"PDF parse failed: {ex}") from ex
        return DocumentPayload(
            source_name=os.path.basename(path),
            kind=ContentKind.FREE_TEXT,
            content="".join(parts),
            source_path=path,
        )
