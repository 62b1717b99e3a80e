"""Chunk → index-record conversion."""

from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING

from chatpdf.embeddings import get_embeddings
from chatpdf.exceptions import EmbeddingError
from chatpdf.retrieval.models import IndexRecord, RecordMetadata

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def content_hash(text: str) -> str:
    """MD5 hex digest of *text*, used as the record id."""
    return hashlib.md5(text.encode("utf-8", errors="surrogatepass")).hexdigest()


async def embed_document(embeddings: Embeddings, doc: Document) -> IndexRecord:
    """Embed one chunk and assemble its :class:`IndexRecord`."""
    try:
        values = await get_embeddings(embeddings, doc.page_content)
    except EmbeddingError:
        logger.error("Error embedding chunk from page %s", doc.metadata.get("page_number"))
        raise

    return IndexRecord(
        id=content_hash(doc.page_content),
        values=values,
        metadata=RecordMetadata(
            text=doc.metadata["text"],
            page_number=doc.metadata["page_number"],
        ),
    )
