"""
Embedding boundary layer.

Dependencies: httpx
System role: Embedding runtime adapter
"""

from enterprise_rag.boundary.embeddings.ollama_client import OllamaEmbeddingClient

__all__ = ["OllamaEmbeddingClient"]
