"""Exception hierarchy, one class per external collaborator call site."""

from __future__ import annotations

from typing import Any


class ChatPDFError(Exception):
    """Base exception for all chatpdf errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class DownloadError(ChatPDFError):
    """Raised when the object store cannot produce the requested file.

    ``not_found`` is set only when the object does not exist.
    """

    def __init__(self, message: str, file_key: str | None = None, *, not_found: bool = False) -> None:
        self.file_key = file_key
        self.not_found = not_found
        super().__init__(message, {"file_key": file_key} if file_key else None)


class ExtractionError(ChatPDFError):
    """Raised when a downloaded file cannot be read as a PDF."""


class EmbeddingError(ChatPDFError):
    """Raised when the embedding service fails."""


class IndexWriteError(ChatPDFError):
    """Raised when upserting records into the vector index fails."""

    def __init__(self, message: str, namespace: str | None = None) -> None:
        self.namespace = namespace
        super().__init__(message, {"namespace": namespace} if namespace is not None else None)


class IndexQueryError(ChatPDFError):
    """Raised when a similarity search against the vector index fails."""

    def __init__(self, message: str, namespace: str | None = None) -> None:
        self.namespace = namespace
        super().__init__(message, {"namespace": namespace} if namespace is not None else None)
