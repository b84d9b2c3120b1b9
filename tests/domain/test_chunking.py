import math

import pytest

from kb_assistant.domain.errors import UnsupportedFormat, ValidationError
from kb_assistant.domain.models import Chunk, ContentKind
from kb_assistant.domain.services.chunking import (
    ChunkingParams,
    chunk,
    chunk_free_text,
    chunk_tabular,
    split_rows,
)


def test_free_text_8000_chars_gives_two_full_chunks():
    text = "x" * 8000
    chunks = chunk("doc.pdf", ContentKind.FREE_TEXT, text)

    assert [c.position for c in chunks] == [0, 1]
    assert [len(c.content) for c in chunks] == [4000, 4000]
    assert all(c.source_name == "doc.pdf" for c in chunks)


@pytest.mark.parametrize("length", [1, 3999, 4000, 4001, 12345])
def test_free_text_count_and_round_trip(length: int):
    text = "".join(chr(ord("a") + i % 26) for i in range(length))
    chunks = chunk("doc.pdf", "free_text", text)

    assert len(chunks) == math.ceil(length / 4000)
    assert "".join(c.content for c in chunks) == text
    assert [c.position for c in chunks] == list(range(len(chunks)))


def test_free_text_ignores_word_boundaries():
    p = ChunkingParams(text_chunk_size=5)
    chunks = chunk_free_text("a.txt", "hello world", p)
    assert [c.content for c in chunks] == ["hello", " worl", "d"]


@pytest.mark.parametrize("text", ["", "   ", "\n\t \n"])
def test_free_text_blank_input_gives_no_chunks(text: str):
    assert chunk("a.txt", ContentKind.FREE_TEXT, text) == []


def test_free_text_keeps_surrounding_whitespace():
    p = ChunkingParams(text_chunk_size=4)
    chunks = chunk("a.txt", ContentKind.FREE_TEXT, "  ab  ", p)
    assert "".join(c.content for c in chunks) == "  ab  "


def test_free_text_rejects_rows():
    with pytest.raises(ValidationError):
        chunk("a.txt", ContentKind.FREE_TEXT, [["a", "b"]])


def test_tabular_renders_header_labelled_rows():
    raw = "name,qty\napple,3\npear,5\n"
    chunks = chunk("fruit.csv", ContentKind.TABULAR, raw)

    assert len(chunks) == 1
    assert chunks[0].content == "[CSV Header: name, qty]\nname: apple | qty: 3\nname: pear | qty: 5"
    assert chunks[0].position == 0


def test_tabular_missing_trailing_fields_render_empty():
    rows = [["a", "b", "c"], ["1"], ["2", "3", "4", "extra"]]
    chunks = chunk_tabular("t.csv", rows, ChunkingParams())

    lines = chunks[0].content.splitlines()
    assert lines[1] == "a: 1 | b:  | c: "
    assert lines[2] == "a: 2 | b: 3 | c: 4"


def test_tabular_blank_lines_do_not_count_as_rows():
    raw = "h1,h2\n\n1,2\n   \n3,4\n\n"
    p = ChunkingParams(rows_per_chunk=2)
    chunks = chunk("t.csv", "tabular", raw, p)

    assert len(chunks) == 1
    assert chunks[0].content.count("\n") == 2


@pytest.mark.parametrize("rows,per_chunk", [(1, 30), (30, 30), (31, 30), (95, 30), (7, 3)])
def test_tabular_chunk_count(rows: int, per_chunk: int):
    data = [["id", "value"]] + [[str(i), f"v{i}"] for i in range(rows)]
    chunks = chunk("t.csv", ContentKind.TABULAR, data, ChunkingParams(rows_per_chunk=per_chunk))

    assert len(chunks) == math.ceil(rows / per_chunk)
    assert [c.position for c in chunks] == list(range(len(chunks)))
    # every batch repeats the header line
    assert all(c.content.startswith("[CSV Header: id, value]\n") for c in chunks)


@pytest.mark.parametrize("raw", ["", "only,header\n", "\n\nh1,h2\n\n"])
def test_tabular_without_data_rows_gives_no_chunks(raw: str):
    assert chunk("t.csv", ContentKind.TABULAR, raw) == []


def test_split_rows_honours_quotes_and_delimiter():
    assert split_rows('a;b\n"x;y";z\n', delimiter=";") == [["a", "b"], ["x;y", "z"]]


def test_unknown_kind_raises_unsupported_format():
    with pytest.raises(UnsupportedFormat) as exc:
        chunk("a.docx", "word", "text")
    assert exc.value.kind == "word"
    assert "word" in str(exc.value)


def test_chunking_is_deterministic():
    raw = "h\n" + "\n".join(str(i) for i in range(100))
    first = chunk("t.csv", ContentKind.TABULAR, raw)
    second = chunk("t.csv", ContentKind.TABULAR, raw)
    assert first == second
    assert all(isinstance(c, Chunk) for c in first)


def test_tabular_row_of_empty_fields_is_a_data_row():
    chunks = chunk("t.csv", ContentKind.TABULAR, "a,b\n,\n1,2\n")

    assert chunks[0].content.splitlines()[1:] == ["a:  | b: ", "a: 1 | b: 2"]


def test_tabular_rows_of_empty_fields_count_towards_batches():
    chunks = chunk("t.csv", ContentKind.TABULAR, "a,b\n" + ",\n" * 31)
    assert len(chunks) == 2


def test_tabular_presplit_rows_drop_only_blank_lines():
    rows = [["h1", "h2"], [], ["  "], ["", ""], ["1", "2"]]
    chunks = chunk_tabular("t.csv", rows, ChunkingParams())

    assert chunks[0].content.splitlines()[1:] == ["h1:  | h2: ", "h1: 1 | h2: 2"]


@pytest.mark.parametrize("field", ["text_chunk_size", "rows_per_chunk"])
@pytest.mark.parametrize("value", [0, -1])
def test_chunking_params_reject_non_positive_sizes(field: str, value: int):
    with pytest.raises(ValidationError):
        ChunkingParams(**{field: value})


def test_unknown_kind_message_does_not_mention_uploads():
    with pytest.raises(UnsupportedFormat) as exc:
        chunk("a.docx", "word", "text")
    assert str(exc.value) == "Unsupported format 'word'."
