import pytest

from kb_assistant.domain.errors import DocumentError
from kb_assistant.domain.models import ContentKind
from kb_assistant.infrastructure.parsing.csv_loader import CSVLoaderAdapter
from kb_assistant.infrastructure.parsing.pdf_text_extractor import (
    PDFTextExtractorAdapter,
    PlainTextLoaderAdapter,
)


def test_plain_text_loader_reads_file(tmp_path):
    p = tmp_path / "notes.txt"
    p.write_text("Hallo Welt\n\nZweite Zeile\n", encoding="utf-8")

    payload = PlainTextLoaderAdapter().load(str(p))

    assert payload.content == "Hallo Welt\n\nZweite Zeile\n"
    assert payload.kind is ContentKind.FREE_TEXT
    assert payload.source_name == "notes.txt"
    assert payload.source_path == str(p)


def test_plain_text_loader_missing_file_raises_document_error():
    with pytest.raises(DocumentError):
        PlainTextLoaderAdapter().load("/no/such/file.txt")


def test_csv_loader_returns_rows(tmp_path):
    p = tmp_path / "sales.csv"
    p.write_text('\ufeffregion,amount\nnorth,"1,200"\n\nsouth,800\n', encoding="utf-8")

    payload = CSVLoaderAdapter().load(str(p))

    assert payload.kind is ContentKind.TABULAR
    assert payload.source_name == "sales.csv"
    assert payload.content == [["region", "amount"], ["north", "1,200"], [], ["south", "800"]]


def test_csv_loader_custom_delimiter(tmp_path):
    p = tmp_path / "semi.csv"
    p.write_text("a;b\n1;2\n", encoding="utf-8")
    assert CSVLoaderAdapter(delimiter=";").load(str(p)).content == [["a", "b"], ["1", "2"]]


def test_csv_loader_missing_file_raises_document_error():
    with pytest.raises(DocumentError):
        CSVLoaderAdapter().load("/no/such/file.csv")


def test_pdf_loader_errors_for_missing_file():
    with pytest.raises(DocumentError):
        PDFTextExtractorAdapter().load("/non/existent.pdf")


def test_pdf_loader_marks_pages(tmp_path):
    from pypdf import PdfWriter

    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.add_blank_page(width=72, height=72)
    p = tmp_path / "blank.pdf"
    with open(p, "wb") as f:
        writer.write(f)

    payload = PDFTextExtractorAdapter().load(str(p))

    assert payload.kind is ContentKind.FREE_TEXT
    assert payload.source_name == "blank.pdf"
    assert payload.content == "--- Page 1 ---\n\n\n--- Page 2 ---\n\n\n"
