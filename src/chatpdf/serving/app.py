"""FastAPI application exposing document ingestion and context retrieval."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from chatpdf.config import settings
from chatpdf.exceptions import ChatPDFError, DownloadError
from chatpdf.ingestion.pipeline import DocumentIngestor
from chatpdf.namespace import derive_namespace
from chatpdf.retrieval.retriever import ContextRetriever

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build every external client once and share it across requests."""
    from chatpdf.embeddings import get_embedding_function
    from chatpdf.ingestion.storage import S3Storage
    from chatpdf.retrieval.chroma_store import ChromaVectorStore

    logging.basicConfig(level=settings.log_level)
    embeddings = get_embedding_function()
    store = ChromaVectorStore()
    app.state.ingestor = DocumentIngestor(storage=S3Storage(), embeddings=embeddings, store=store)
    app.state.retriever = ContextRetriever(embeddings=embeddings, store=store)
    logger.info("chatpdf ready (collection=%s)", store.index_name)
    yield


app = FastAPI(
    title="chatpdf API",
    version="0.1.0",
    description="Index uploaded PDFs and retrieve per-document context.",
    lifespan=lifespan,
)


# ── Dependencies ──────────────────────────────────────────────────────
def get_ingestor(request: Request) -> DocumentIngestor:
    return request.app.state.ingestor


def get_retriever(request: Request) -> ContextRetriever:
    return request.app.state.retriever


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Key of an already uploaded PDF."""

    file_key: str


class IngestResponse(BaseModel):
    file_key: str
    namespace: str
    chunks: int


class ContextRequest(BaseModel):
    """Question about one indexed document."""

    query: str
    file_key: str


class ContextResponse(BaseModel):
    context: str


# ── Error mapping ─────────────────────────────────────────────────────
@app.exception_handler(ChatPDFError)
async def chatpdf_error_handler(request: Request, exc: ChatPDFError) -> JSONResponse:
    status_code = 404 if isinstance(exc, DownloadError) and exc.not_found else 502
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@app.post("/ingest", response_model=IngestResponse)
async def ingest(
    request: IngestRequest,
    ingestor: DocumentIngestor = Depends(get_ingestor),
) -> IngestResponse:
    """Index the PDF stored under ``file_key``."""
    first_page = await ingestor.load_into_index(request.file_key)
    return IngestResponse(
        file_key=request.file_key,
        namespace=derive_namespace(request.file_key),
        chunks=len(first_page),
    )


@app.post("/context", response_model=ContextResponse)
async def context(
    request: ContextRequest,
    retriever: ContextRetriever = Depends(get_retriever),
) -> ContextResponse:
    """Return the document context relevant to ``query``."""
    return ContextResponse(context=await retriever.get_context(request.query, request.file_key))
