"""Document ingestor — S3 PDF → chunk records in the vector index.

Usage::

    ingestor = DocumentIngestor(storage=S3Storage(), embeddings=..., store=...)
    first_page_chunks = await ingestor.load_into_index("uploads/1700000000report.pdf")
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from chatpdf.config import settings
from chatpdf.exceptions import DownloadError, ExtractionError, IndexWriteError
from chatpdf.ingestion.chunker import prepare_document
from chatpdf.ingestion.embedder import embed_document
from chatpdf.ingestion.loader import load_pdf_pages
from chatpdf.namespace import derive_namespace

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from chatpdf.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class DocumentStorage(Protocol):
    """Anything that can download a file key into its own temp directory."""

    def download(self, file_key: str) -> str: ...


class DocumentIngestor:
    """Index one PDF per call under its own namespace.

    Parameters
    ----------
    storage:
        Object-store adapter, usually :class:`~chatpdf.ingestion.storage.S3Storage`.
    embeddings:
        LangChain embedding model used for every chunk.
    store:
        Vector-store backend receiving the records.
    loader:
        Page extractor; defaults to :func:`~chatpdf.ingestion.loader.load_pdf_pages`.
    max_metadata_bytes:
        Byte budget of each chunk's stored ``text`` metadata.
    """

    def __init__(
        self,
        storage: DocumentStorage,
        embeddings: Embeddings,
        store: VectorStoreBase,
        *,
        loader: Callable[[str | Path], list[Document]] = load_pdf_pages,
        max_metadata_bytes: int = settings.metadata_text_max_bytes,
    ) -> None:
        self._storage = storage
        self._embeddings = embeddings
        self._store = store
        self._loader = loader
        self.max_metadata_bytes = max_metadata_bytes

    async def load_into_index(self, file_key: str) -> list[Document]:
        """Download, chunk, embed and upsert the PDF stored at *file_key*.

        Any collaborator failure aborts the whole call and propagates
        unchanged; nothing is upserted unless every chunk was embedded.
        The downloaded file's directory is removed before returning.

        Returns
        -------
        list[Document]
            The chunks of the first page (empty for a PDF without pages).
        """
        logger.info("Downloading %s into file system", file_key)
        try:
            file_name = await asyncio.to_thread(self._storage.download, file_key)
        except DownloadError:
            logger.error("Could not download %s", file_key)
            raise

        try:
            return await self._index_file(file_key, file_name)
        finally:
            shutil.rmtree(os.path.dirname(file_name), ignore_errors=True)

    async def _index_file(self, file_key: str, file_name: str) -> list[Document]:
        try:
            pages = await asyncio.to_thread(self._loader, file_name)
        except ExtractionError:
            logger.error("Could not read %s as a PDF", file_key)
            raise
        logger.info("Extracted %d pages from %s", len(pages), file_key)

        documents = await asyncio.gather(
            *(
                asyncio.to_thread(prepare_document, page, max_metadata_bytes=self.max_metadata_bytes)
                for page in pages
            )
        )

        chunks = [chunk for page_chunks in documents for chunk in page_chunks]
        records = await asyncio.gather(*(embed_document(self._embeddings, chunk) for chunk in chunks))

        namespace = derive_namespace(file_key)
        logger.info("Inserting %d vectors into namespace %r", len(records), namespace)
        try:
            await asyncio.to_thread(self._store.upsert, namespace, list(records))
        except IndexWriteError:
            logger.exception("Error upserting vectors for %s", file_key)
            raise

        return documents[0] if documents else []
