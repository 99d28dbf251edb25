"""Core RAG business logic: ingestion, retrieval and domain errors."""
