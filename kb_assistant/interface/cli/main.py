"""CLI for chatting with uploaded documents.

Interface layer is thin: parse args, format output. Ingestion and retrieval
live in the use cases; the knowledge base lives as long as the process.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from kb_assistant.application.dto.ingest_dto import IngestReport, IngestRequest
from kb_assistant.application.dto.query_dto import QueryRequest
from kb_assistant.application.knowledge_base import KnowledgeBase
from kb_assistant.application.ports.llm_port import ChatMessage
from kb_assistant.application.use_cases.ingest_documents import IngestDocuments
from kb_assistant.application.use_cases.query_knowledge_base import QueryKnowledgeBase
from kb_assistant.config.composition import build_ingest_use_case, build_query_use_case
from kb_assistant.config.settings import AppSettings
from kb_assistant.domain.errors import ValidationError

PROMPT = "you> "


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        "kb-assistant", description="Ask questions about PDF/TXT/CSV files"
    )
    ap.add_argument("files", nargs="*", help="Documents to index (PDF, TXT, MD, CSV)")
    ap.add_argument("--question", "-q", help="Answer one question and exit")
    ap.add_argument("--limit", type=int, default=None, help="Max chunks handed to the LLM")
    ap.add_argument("--no-llm", action="store_true", help="Use extractive fallback")
    return ap


def print_report(report: IngestReport) -> None:
    for name, n in report.ingested:
        print(f"Indexed {name}: {n} chunks")
    for name in report.skipped:
        print(f"Skipped {name}: already indexed")
    for name, msg in report.failed:
        print(f"[ERROR] {name}: {msg}")


def ask(
    uc: QueryKnowledgeBase,
    question: str,
    history: list[ChatMessage],
    limit: int | None = None,
) -> bool:
    """Answer one question, append the turn to ``history``; False on failure."""
    result = uc.execute(QueryRequest(question=question, history=tuple(history), limit=limit))
    if not result.ok or result.value is None:
        err = result.error
        print(f"\n[ERROR] {type(err).__name__}: {err}")
        return False

    answer = result.value
    print("\n" + "=" * 80)
    print("ANSWER:")
    print("=" * 80)
    print(answer.text)
    if answer.sources:
        print("\nSOURCES: " + ", ".join(answer.sources))
    history.append(ChatMessage(role="user", content=question))
    history.append(ChatMessage(role="assistant", content=answer.text))
    return True


def repl(
    kb: KnowledgeBase,
    ingest_uc: IngestDocuments,
    query_uc: QueryKnowledgeBase,
    limit: int | None = None,
) -> None:
    """Interactive loop. Commands: ``:add PATH...``, ``:reset``, ``:quit``."""
    history: list[ChatMessage] = []
    print(f"{len(kb)} snippets indexed. Type :quit to exit.")
    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            break
        if not line:
            continue
        if line in (":quit", ":q", ":exit"):
            break
        if line == ":reset":
            kb.reset()
            history.clear()
            print("Knowledge base cleared.")
            continue
        if line.startswith(":add"):
            paths = line.split()[1:]
            if not paths:
                print("Usage: :add PATH [PATH...]")
                continue
            print_report(ingest_uc.execute(IngestRequest(paths=paths)))
            continue
        ask(query_uc, line, history, limit)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = AppSettings()
    logging.basicConfig(
        level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    kb = KnowledgeBase()
    try:
        ingest_uc = build_ingest_use_case(kb, settings)
        query_uc = build_query_use_case(kb, with_llm=not args.no_llm, settings=settings)
    except ValidationError as ex:
        print(f"[ERROR] invalid configuration: {ex}")
        return 1

    if args.files:
        report = ingest_uc.execute(IngestRequest(paths=args.files))
        print_report(report)

    if args.question:
        return 0 if ask(query_uc, args.question, [], args.limit) else 1

    repl(kb, ingest_uc, query_uc, args.limit)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
