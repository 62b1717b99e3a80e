"""
Serving — FastAPI application exposing ingestion and context retrieval.
"""
