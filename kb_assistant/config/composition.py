from kb_assistant.application.knowledge_base import KnowledgeBase
from kb_assistant.application.ports.document_loader_port import DocumentLoaderPort
from kb_assistant.application.ports.llm_port import LLMPort
from kb_assistant.application.use_cases.ingest_documents import IngestDocuments
from kb_assistant.application.use_cases.query_knowledge_base import QueryKnowledgeBase
from kb_assistant.config.settings import AppSettings
from kb_assistant.infrastructure.llm.openai_chat_adapter import OpenAIChatAdapter
from kb_assistant.infrastructure.parsing.csv_loader import CSVLoaderAdapter
from kb_assistant.infrastructure.parsing.pdf_text_extractor import (
    PDFTextExtractorAdapter,
    PlainTextLoaderAdapter,
)


def build_loaders(settings: AppSettings) -> dict[str, DocumentLoaderPort]:
    """Loader per lower-case file extension."""
    text = PlainTextLoaderAdapter()
    return {
        "pdf": PDFTextExtractorAdapter(),
        "csv": CSVLoaderAdapter(delimiter=settings.csv_delimiter),
        "txt": text,
        "md": text,
    }


def build_llm(settings: AppSettings) -> LLMPort:
    return OpenAIChatAdapter(
        base_url=settings.llm_base_url or None,
        api_key=settings.llm_api_key,
        model=settings.llm_model,
    )


def build_ingest_use_case(
    knowledge_base: KnowledgeBase, settings: AppSettings | None = None
) -> IngestDocuments:
    settings = settings or AppSettings()
    return IngestDocuments(
        knowledge_base=knowledge_base,
        loaders=build_loaders(settings),
        params=settings.chunking_params(),
    )


def build_query_use_case(
    knowledge_base: KnowledgeBase,
    with_llm: bool = True,
    settings: AppSettings | None = None,
) -> QueryKnowledgeBase:
    """Build QueryKnowledgeBase use case.

    Args:
        knowledge_base: Session state shared with the ingest use case.
        with_llm: If True, answers come from the LLM.
                  If False, uses extractive fallback (rendered chunks).
        settings: Application settings (default: load from environment)
    """
    settings = settings or AppSettings()
    return QueryKnowledgeBase(
        knowledge_base=knowledge_base,
        llm=build_llm(settings) if with_llm else None,
        params=settings.retrieval_params(),
        history_window=settings.history_window,
        temperature=settings.llm_temperature,
    )
