from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, Union

from kb_assistant.domain.models import ContentKind


@dataclass(frozen=True)
class DocumentPayload:
    source_name: str
    kind: ContentKind
    # Free text as one string; tabular data as rows of fields.
    content: Union[str, Sequence[Sequence[str]]]
    source_path: str | None = None


class DocumentLoaderPort(Protocol):
    def load(self, path: str) -> DocumentPayload: ...
