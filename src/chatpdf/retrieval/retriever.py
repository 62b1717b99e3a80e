"""Context retriever — query → namespaced top-K search → context string.

Usage::

    retriever = ContextRetriever(embeddings=..., store=ChromaVectorStore())
    context = await retriever.get_context("What is the refund policy?", file_key)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from chatpdf.config import settings
from chatpdf.embeddings import get_embeddings
from chatpdf.exceptions import EmbeddingError, IndexQueryError
from chatpdf.namespace import derive_namespace
from chatpdf.retrieval.base import VectorStoreBase
from chatpdf.retrieval.models import MatchResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def select_qualifying(matches: list[MatchResult], score_threshold: float) -> list[MatchResult]:
    """Keep matches scoring strictly above *score_threshold*; unscored ones are dropped."""
    return [m for m in matches if m.score is not None and m.score > score_threshold]


def assemble_context(matches: list[MatchResult], max_chars: int) -> str:
    """Join match texts with newlines, in the given order, and cut to *max_chars*."""
    return "\n".join(m.text for m in matches)[:max_chars]


class ContextRetriever:
    """Build prompt context for a question about one document.

    Parameters
    ----------
    embeddings:
        LangChain embedding model; must be the one used at ingestion time.
    store:
        Vector-store backend.
    top_k:
        Number of nearest records requested from the store.
    score_threshold:
        Matches must score strictly above this to be used.
    max_context_chars:
        Character budget of the returned context.
    """

    def __init__(
        self,
        embeddings: Embeddings,
        store: VectorStoreBase,
        *,
        top_k: int = settings.top_k,
        score_threshold: float = settings.score_threshold,
        max_context_chars: int = settings.max_context_chars,
    ) -> None:
        self._embeddings = embeddings
        self._store = store
        self.top_k = top_k
        self.score_threshold = score_threshold
        self.max_context_chars = max_context_chars

    # -- public API -----------------------------------------------------------

    async def get_matches(self, embedding: list[float], file_key: str) -> list[MatchResult]:
        """Top-K matches for *embedding* within the namespace of *file_key*."""
        namespace = derive_namespace(file_key)
        try:
            return await asyncio.to_thread(
                self._store.query,
                namespace,
                embedding,
                top_k=self.top_k,
                include_metadata=True,
            )
        except IndexQueryError:
            logger.exception("Error querying embeddings in namespace %r", namespace)
            raise

    async def get_context(self, query: str, file_key: str) -> str:
        """Return up to ``max_context_chars`` of relevant page text for *query*.

        An empty string means nothing in the document scored above the
        threshold.
        """
        try:
            query_embedding = await get_embeddings(self._embeddings, query)
        except EmbeddingError:
            logger.error("Error embedding query for %s", file_key)
            raise

        matches = await self.get_matches(query_embedding, file_key)
        qualifying = select_qualifying(matches, self.score_threshold)
        logger.debug("%d of %d matches above %.2f", len(qualifying), len(matches), self.score_threshold)
        return assemble_context(qualifying, self.max_context_chars)
