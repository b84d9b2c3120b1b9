from __future__ import annotations

import os
from dataclasses import dataclass

from kb_assistant.application.ports.document_loader_port import DocumentLoaderPort, DocumentPayload
from kb_assistant.domain.errors import DocumentError
from kb_assistant.domain.models import ContentKind
from kb_assistant.domain.services.chunking import split_rows


@dataclass
class CSVLoaderAdapter(DocumentLoaderPort):
    """Reads a delimited file into rows; the first row is the header."""

    delimiter: str = ","
    encoding: str = "utf-8-sig"  # tolerate a BOM from spreadsheet exports

    def load(self, path: str) -> DocumentPayload:  # type: ignore[override]
        try:
            with open(path, encoding=self.encoding, newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as ex:
            raise DocumentError(f"CSV load failed: {ex}") from ex
        return DocumentPayload(
            source_name=os.path.basename(path),
            kind=ContentKind.TABULAR,
            content=split_rows(text, self.delimiter),
            source_path=path,
        )
