"""Abstract base class for namespaced vector-store backends.

Adding a new backend (Pinecone, Qdrant …) only requires subclassing
:class:`VectorStoreBase` and implementing :meth:`upsert`, :meth:`query`
and :meth:`health_check`.  Records written under one namespace must never
be returned by a query against another.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from chatpdf.retrieval.models import IndexRecord, MatchResult


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    index_name:
        Logical name of the index / collection holding every namespace.
    """

    def __init__(self, index_name: str) -> None:
        self.index_name = index_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, namespace: str, records: list[IndexRecord]) -> None:
        """Insert or overwrite *records* (keyed by ``id``) in *namespace*.

        Raises
        ------
        IndexWriteError
            When the backend rejects the batch.
        """
        ...

    @abstractmethod
    def query(
        self,
        namespace: str,
        vector: list[float],
        *,
        top_k: int = 5,
        include_metadata: bool = True,
    ) -> list[MatchResult]:
        """Return the *top_k* records of *namespace* closest to *vector*.

        Results are ordered by descending score.

        Raises
        ------
        IndexQueryError
            When the backend cannot run the search.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...
