"""chatpdf — per-document PDF indexing and context retrieval."""

__version__ = "0.1.0"
