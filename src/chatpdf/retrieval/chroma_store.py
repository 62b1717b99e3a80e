"""Chroma implementation of the vector-store abstraction.

All namespaces share one collection.  Each row stores its namespace in
metadata and is keyed ``"<namespace>:<record id>"`` so equal content
hashes from different documents stay separate.
"""

from __future__ import annotations

import logging
from typing import Any

import chromadb

from chatpdf.config import settings
from chatpdf.exceptions import IndexQueryError, IndexWriteError
from chatpdf.retrieval.base import VectorStoreBase
from chatpdf.retrieval.models import IndexRecord, MatchResult

logger = logging.getLogger(__name__)

NAMESPACE_FIELD = "namespace"


def _row_id(namespace: str, record_id: str) -> str:
    return f"{namespace}:{record_id}"


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    index_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client; an ``HttpClient`` is created when omitted.
    """

    def __init__(
        self,
        index_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any = None,
    ) -> None:
        super().__init__(index_name)
        self._client = client or chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            name=index_name,
            metadata={"hnsw:space": "cosine"},
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def upsert(self, namespace: str, records: list[IndexRecord]) -> None:
        if not records:
            return

        try:
            self._collection.upsert(
                ids=[_row_id(namespace, r.id) for r in records],
                embeddings=[r.values for r in records],
                metadatas=[
                    {**r.metadata.model_dump(), NAMESPACE_FIELD: namespace} for r in records
                ],
            )
        except Exception as exc:
            raise IndexWriteError(f"Chroma upsert failed: {exc}", namespace) from exc

    def query(
        self,
        namespace: str,
        vector: list[float],
        *,
        top_k: int = 5,
        include_metadata: bool = True,
    ) -> list[MatchResult]:
        include = ["metadatas", "distances"] if include_metadata else ["distances"]
        try:
            results = self._collection.query(
                query_embeddings=[vector],
                n_results=top_k,
                where={NAMESPACE_FIELD: namespace},
                include=include,
            )
        except Exception as exc:
            raise IndexQueryError(f"Chroma query failed: {exc}", namespace) from exc

        ids = (results.get("ids") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0] or [None] * len(ids)

        prefix = _row_id(namespace, "")
        matches: list[MatchResult] = []
        for row_id, dist, meta in zip(ids, distances, metas):
            meta = dict(meta or {})
            meta.pop(NAMESPACE_FIELD, None)
            matches.append(
                MatchResult(
                    id=row_id.removeprefix(prefix),
                    # Cosine distance → similarity.
                    score=None if dist is None else 1.0 - dist,
                    metadata=meta,
                )
            )
        return matches

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
