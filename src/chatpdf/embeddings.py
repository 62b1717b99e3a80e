"""Embedding model selection and single-text embedding."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chatpdf.config import settings
from chatpdf.exceptions import EmbeddingError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def get_embedding_function() -> Embeddings:
    """Return the configured LangChain embedding model.

    ``settings.embedding_provider`` selects between a local
    sentence-transformer (default) and the OpenAI embeddings API.
    """
    if settings.embedding_provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        logger.info("Using OpenAI embeddings: %s", settings.openai_embedding_model)
        return OpenAIEmbeddings(
            model=settings.openai_embedding_model,
            api_key=settings.openai_api_key,
        )

    from langchain_huggingface import HuggingFaceEmbeddings

    return HuggingFaceEmbeddings(model_name=settings.embedding_model)


async def get_embeddings(embeddings: Embeddings, text: str) -> list[float]:
    """Embed a single *text*, wrapping any service failure in ``EmbeddingError``."""
    try:
        return await embeddings.aembed_query(text.replace("\n", " "))
    except Exception as exc:
        raise EmbeddingError(f"Embedding request failed: {exc}") from exc
