"""
Context block assembly.

Renders ranked matches as labelled entries and packs them into a fixed
character budget for the chat system prompt.

Dependencies: enterprise_rag.boundary.vdb
System role: Prompt context construction
"""

from enterprise_rag.boundary.vdb import Match, PointPayload

ENTRY_SEPARATOR = "\n\n"


def match_label(payload: PointPayload) -> str:
    """Label an entry by title, source, document id, then a generic name."""
    label = payload.title or payload.source or payload.doc_id or "document"
    if payload.category:
        label = f"{label} [{payload.category}]"
    return label


def render_entry(match: Match) -> str:
    """Render one match as `[<label>#<chunk_index>] <text>`."""
    payload = match.payload
    return f"[{match_label(payload)}#{payload.chunk_index}] {payload.text}"


def build_context(matches: list[Match], max_chars: int) -> str:
    """
    Pack matches into a context block.

    Matches are taken by descending score. Entries are atomic: the first
    entry that would push the block past max_chars ends the block.

    Args:
        matches: Search matches
        max_chars: Character budget, separators included

    Returns:
        str: Entries joined by blank lines, empty when nothing fits
    """
    ranked = sorted(matches, key=lambda match: match.score, reverse=True)
    entries: list[str] = []
    total = 0

    for match in ranked:
        if not match.payload.text:
            continue
        entry = render_entry(match)
        added = len(entry) + (len(ENTRY_SEPARATOR) if entries else 0)
        if total + added > max_chars:
            break
        entries.append(entry)
        total += added

    return ENTRY_SEPARATOR.join(entries)


def compose_system_prompt(context: str, system_prompt: str | None = None) -> str:
    """
    Combine retrieved context with the chat system prompt.

    The context comes first so the system instructions stay closest to the
    conversation.
    """
    parts = []
    if context:
        parts.append(f"Context:\n{context}")
    if system_prompt and system_prompt.strip():
        parts.append(system_prompt.strip())
    return ENTRY_SEPARATOR.join(parts)
