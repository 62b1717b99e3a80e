"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Object storage
    aws_region: str = "us-east-1"
    s3_bucket_name: str = Field(default="", description="Bucket holding uploaded PDFs")

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "chatpdf-online"

    # Embedding
    embedding_provider: Literal["huggingface", "openai"] = "huggingface"
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    openai_api_key: str = Field(default="", description="Only used when embedding_provider is 'openai'")
    openai_embedding_model: str = "text-embedding-ada-002"

    # Ingestion / retrieval limits
    metadata_text_max_bytes: int = 36_000
    top_k: int = 5
    score_threshold: float = 0.7
    max_context_chars: int = 3000

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
