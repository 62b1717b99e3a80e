"""
Ingestion — download, page extraction, chunking, embedding and upsert.

A PDF stored under a file key is turned into embedded chunk records that
live in the vector-index namespace derived from that key.  The entry
point is :class:`chatpdf.ingestion.pipeline.DocumentIngestor`.
"""
