"""
Retrieval — namespaced vector search and context assembly.

Public surface
--------------
- :class:`ContextRetriever` — query → context string for one document.
- :class:`VectorStoreBase` — abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`IndexRecord`, :class:`MatchResult`, :class:`RecordMetadata` — data models.
"""

from chatpdf.retrieval.base import VectorStoreBase
from chatpdf.retrieval.models import IndexRecord, MatchResult, RecordMetadata
from chatpdf.retrieval.retriever import ContextRetriever

__all__ = [
    "ChromaVectorStore",
    "ContextRetriever",
    "IndexRecord",
    "MatchResult",
    "RecordMetadata",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from chatpdf.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
