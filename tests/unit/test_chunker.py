"""Unit tests for page chunk preparation."""

import pytest
from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from chatpdf.ingestion.chunker import prepare_document, truncate_string_by_bytes


class TestTruncateStringByBytes:
    def test_short_text_untouched(self) -> None:
        assert truncate_string_by_bytes("hello", 100) == "hello"

    def test_ascii_cut_at_limit(self) -> None:
        assert truncate_string_by_bytes("a" * 50, 36) == "a" * 36

    @pytest.mark.parametrize("limit", range(0, 12))
    def test_never_splits_multibyte_character(self, limit: int) -> None:
        text = "aé€😀b"  # 1 + 2 + 3 + 4 + 1 bytes
        out = truncate_string_by_bytes(text, limit)
        assert len(out.encode("utf-8")) <= limit
        assert text.startswith(out)

    def test_partial_character_is_dropped(self) -> None:
        assert truncate_string_by_bytes("aé", 2) == "a"

    def test_negative_limit_gives_empty(self) -> None:
        assert truncate_string_by_bytes("abc", -1) == ""


def _page(text: str, page_number: int = 1) -> Document:
    return Document(page_content=text, metadata={"page_number": page_number, "source": "x.pdf"})


def test_prepare_document_strips_newlines() -> None:
    chunks = prepare_document(_page("line one\nline two\n"))
    assert len(chunks) == 1
    assert chunks[0].page_content == "line oneline two"
    assert chunks[0].metadata["text"] == "line oneline two"


def test_prepare_document_splits_long_page() -> None:
    """A page longer than the splitter's default chunk size is split."""
    chunks = prepare_document(_page("word " * 2000))
    assert len(chunks) > 1


def test_every_chunk_shares_page_metadata() -> None:
    text = "sentence number one. " * 500
    splitter = RecursiveCharacterTextSplitter(chunk_size=256, chunk_overlap=32)
    chunks = prepare_document(_page(text, page_number=4), max_metadata_bytes=1000, splitter=splitter)
    assert len(chunks) > 1
    assert {c.metadata["page_number"] for c in chunks} == {4}
    assert {c.metadata["text"] for c in chunks} == {text[:1000]}


def test_metadata_text_truncated_to_byte_budget() -> None:
    chunks = prepare_document(_page("x" * 50_000), max_metadata_bytes=36_000)
    assert all(len(c.metadata["text"].encode("utf-8")) == 36_000 for c in chunks)
    assert sum(len(c.page_content) for c in chunks) >= 50_000


def test_empty_page_yields_no_chunks() -> None:
    assert prepare_document(_page("\n\n")) == []


def test_lone_surrogate_is_dropped_not_raised() -> None:
    out = truncate_string_by_bytes("alpha \ud800 text", 100)
    assert out == "alpha  text"
    out.encode("utf-8")
