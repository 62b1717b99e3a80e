"""PDF page extraction — thin wrapper around LangChain's ``PyPDFLoader``."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from langchain_community.document_loaders import PyPDFLoader

from chatpdf.exceptions import ExtractionError

if TYPE_CHECKING:
    from langchain_core.documents import Document


def load_pdf_pages(path: str | Path) -> list[Document]:
    """Load one ``Document`` per PDF page.

    ``PyPDFLoader`` numbers pages from zero; the returned documents carry a
    1-based ``page_number`` in their metadata instead.

    Raises
    ------
    ExtractionError
        When the file is missing or is not a readable PDF.
    """
    try:
        pages = PyPDFLoader(str(path)).load()
    except Exception as exc:
        raise ExtractionError(f"Could not extract text from {path}: {exc}") from exc

    for position, page in enumerate(pages):
        page.metadata["page_number"] = int(page.metadata.get("page", position)) + 1
    return pages
