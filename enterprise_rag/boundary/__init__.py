"""Boundary adapters for external services (vector store, embedding runtime)."""
