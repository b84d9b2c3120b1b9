"""Domain errors (typed).

Why: One error family for the application layer, without infra leaks.
"""


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state."""


class UnsupportedFormat(DomainError):
    """Content kind (or file type) the chunker does not know how to handle."""

    def __init__(self, kind: str, hint: str | None = None) -> None:
        message = f"Unsupported format '{kind}'."
        super().__init__(f"{message} {hint}" if hint else message)
        self.kind = kind


class DuplicateSource(DomainError):
    """A source with this name is already part of the knowledge base."""

    def __init__(self, source_name: str) -> None:
        super().__init__(f"Source '{source_name}' is already indexed.")
        self.source_name = source_name


# Infrastructure-mapped errors
class DocumentError(DomainError):
    """Document loading/parsing failed."""


class LLMError(DomainError):
    """LLM backend failed or is misconfigured."""
