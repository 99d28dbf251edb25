"""
Retrieval layer.

Query embedding, filtered similarity search and context assembly.
"""

from .context_builder import build_context, compose_system_prompt, match_label, render_entry
from .retriever import ALL_DEPARTMENTS, RetrievalResult, Retriever

__all__ = [
    "ALL_DEPARTMENTS",
    "RetrievalResult",
    "Retriever",
    "build_context",
    "compose_system_prompt",
    "match_label",
    "render_entry",
]
