"""Shared pytest configuration, fakes and fixtures."""

from __future__ import annotations

import math
import tempfile
from pathlib import Path

import pytest
from langchain_core.embeddings import Embeddings

from chatpdf.exceptions import DownloadError, IndexQueryError, IndexWriteError
from chatpdf.retrieval.base import VectorStoreBase
from chatpdf.retrieval.models import IndexRecord, MatchResult


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes for external collaborators ────────────────────────────────────


class KeywordEmbeddings(Embeddings):
    """Deterministic embeddings: one dimension per keyword present in the text."""

    def __init__(self, keywords: list[str], *, fail_on: str | None = None) -> None:
        self.keywords = keywords
        self.fail_on = fail_on
        self.calls: list[str] = []

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on is not None and self.fail_on in text:
            raise RuntimeError("embedding service unavailable")
        vector = [1.0 if kw in text else 0.0 for kw in self.keywords]
        # Bias dimension so that keyword-free text still has a direction.
        return vector + [0.01]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(t) for t in texts]


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class InMemoryVectorStore(VectorStoreBase):
    """Namespaced in-memory store ranking by cosine similarity."""

    def __init__(self, *, fail_upsert: bool = False, fail_query: bool = False) -> None:
        super().__init__("test-index")
        self.namespaces: dict[str, dict[str, IndexRecord]] = {}
        self.upsert_calls: list[tuple[str, list[IndexRecord]]] = []
        self.fail_upsert = fail_upsert
        self.fail_query = fail_query

    def upsert(self, namespace: str, records: list[IndexRecord]) -> None:
        if self.fail_upsert:
            raise IndexWriteError("upsert rejected", namespace)
        self.upsert_calls.append((namespace, list(records)))
        bucket = self.namespaces.setdefault(namespace, {})
        for record in records:
            bucket[record.id] = record

    def query(
        self,
        namespace: str,
        vector: list[float],
        *,
        top_k: int = 5,
        include_metadata: bool = True,
    ) -> list[MatchResult]:
        if self.fail_query:
            raise IndexQueryError("query rejected", namespace)
        scored = [
            MatchResult(
                id=r.id,
                score=_cosine(vector, r.values),
                metadata=r.metadata.model_dump() if include_metadata else {},
            )
            for r in self.namespaces.get(namespace, {}).values()
        ]
        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:top_k]

    def health_check(self) -> bool:
        return True


class FakeStorage:
    """Object store that serves a fixed set of keys, each into its own temp dir."""

    def __init__(self, keys: set[str] | None = None) -> None:
        self.keys = keys or set()
        self.downloads: list[str] = []

    def download(self, file_key: str) -> str:
        if file_key not in self.keys:
            raise DownloadError(f"File not found in S3: {file_key}", file_key, not_found=True)
        path = Path(tempfile.mkdtemp(prefix="chatpdf_test_")) / file_key.rsplit("/", 1)[-1]
        path.write_bytes(b"%PDF-1.4")
        self.downloads.append(str(path))
        return str(path)


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings(["alpha", "bravo", "charlie"])
