"""
Enterprise RAG backend.

Document ingestion and retrieval pipeline for the self-hosted enterprise chat.
"""

__version__ = "0.1.0"
