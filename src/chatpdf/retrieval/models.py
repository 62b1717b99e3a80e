"""Domain models for index records and search matches."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RecordMetadata(BaseModel):
    """Payload stored next to every vector.

    ``text`` is the whole source page (newlines removed, byte-truncated),
    shared by every chunk cut from that page.
    """

    text: str
    page_number: int


class IndexRecord(BaseModel):
    """Unit persisted to the vector index.

    ``id`` is the MD5 digest of the chunk text, so re-ingesting unchanged
    content overwrites instead of duplicating.
    """

    id: str
    values: list[float]
    metadata: RecordMetadata


class MatchResult(BaseModel):
    """One hit returned by a similarity search."""

    id: str
    score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.metadata.get("text", "")
