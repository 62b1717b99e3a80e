"""Per-page chunk preparation."""

from __future__ import annotations

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from chatpdf.config import settings


def truncate_string_by_bytes(text: str, max_bytes: int) -> str:
    """Return the longest prefix of *text* whose UTF-8 encoding fits *max_bytes*.

    A multi-byte character cut by the limit is dropped whole, as is any
    lone surrogate left over from PDF text extraction.
    """
    encoded = text.encode("utf-8", errors="surrogatepass")
    return encoded[: max(max_bytes, 0)].decode("utf-8", errors="ignore")


def prepare_document(
    page: Document,
    *,
    max_metadata_bytes: int = settings.metadata_text_max_bytes,
    splitter: RecursiveCharacterTextSplitter | None = None,
) -> list[Document]:
    """Split one extracted *page* into chunk documents.

    Newlines are removed before splitting.  Every chunk carries the page
    number and the *whole* page text truncated to *max_metadata_bytes*,
    not its own span.

    Parameters
    ----------
    page:
        Page produced by :func:`chatpdf.ingestion.loader.load_pdf_pages`.
    max_metadata_bytes:
        Byte budget of the ``text`` metadata field.
    splitter:
        Splitter to use; defaults to ``RecursiveCharacterTextSplitter()``
        with its own default chunk size and overlap.
    """
    page_content = page.page_content.replace("\n", "")
    splitter = splitter or RecursiveCharacterTextSplitter()
    return splitter.split_documents(
        [
            Document(
                page_content=page_content,
                metadata={
                    "page_number": page.metadata.get("page_number"),
                    "text": truncate_string_by_bytes(page_content, max_metadata_bytes),
                },
            )
        ]
    )
