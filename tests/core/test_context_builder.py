"""Tests for context block assembly."""

import pytest

from enterprise_rag.boundary.vdb import Match, PointPayload
from enterprise_rag.core.retrieval import (
    build_context,
    compose_system_prompt,
    match_label,
    render_entry,
)


def _match(score: float, text: str, point_id: str = "p", **payload) -> Match:
    return Match(id=point_id, score=score, payload=PointPayload(text=text, **payload))


class TestMatchLabel:
    """Label fallback chain: title, source, document id, literal."""

    def test_prefers_title(self) -> None:
        payload = PointPayload(title="Handbook", source="hr/handbook.pdf", doc_id="d1")
        assert match_label(payload) == "Handbook"

    def test_falls_back_to_source(self) -> None:
        assert match_label(PointPayload(source="hr/handbook.pdf", doc_id="d1")) == "hr/handbook.pdf"

    def test_falls_back_to_doc_id(self) -> None:
        assert match_label(PointPayload(doc_id="d1")) == "d1"

    def test_falls_back_to_literal(self) -> None:
        assert match_label(PointPayload()) == "document"

    def test_appends_category(self) -> None:
        assert match_label(PointPayload(title="Handbook", category="HR")) == "Handbook [HR]"


class TestRenderEntry:
    def test_format(self) -> None:
        match = _match(0.9, "Annual leave is 25 days.", title="Leave", category="HR", chunk_index=3)
        assert render_entry(match) == "[Leave [HR]#3] Annual leave is 25 days."


class TestBuildContext:
    """Budgeted, atomic, score-ordered packing."""

    def test_orders_by_descending_score(self) -> None:
        matches = [
            _match(0.4, "low", title="c"),
            _match(0.9, "high", title="a"),
            _match(0.6, "mid", title="b"),
        ]
        assert build_context(matches, 1000) == "[a#0] high\n\n[b#0] mid\n\n[c#0] low"

    @pytest.mark.parametrize("budget", [0, 10, 56, 57, 115, 116, 117, 174, 175, 500])
    def test_strict_prefix_within_budget(self, budget: int) -> None:
        """Each entry renders to 57 chars; separators count against the budget."""
        matches = [_match(1.0 - i / 10, "x" * 50, title=f"t{i}") for i in range(5)]
        context = build_context(matches, budget)

        assert len(context) <= budget
        entries = context.split("\n\n") if context else []
        expected = [render_entry(match) for match in matches][: len(entries)]
        assert entries == expected
        assert len(entries) == min(5, (budget + 2) // 59)

    def test_overflowing_entry_stops_iteration(self) -> None:
        """A later, shorter entry is not used to fill the remaining budget."""
        matches = [
            _match(0.9, "a" * 20, title="one"),
            _match(0.8, "b" * 200, title="two"),
            _match(0.7, "c", title="three"),
        ]
        assert build_context(matches, 100) == "[one#0] " + "a" * 20

    def test_first_entry_too_large_gives_empty_context(self) -> None:
        assert build_context([_match(0.9, "y" * 100)], 50) == ""

    def test_skips_matches_without_text(self) -> None:
        matches = [_match(0.9, "", title="empty"), _match(0.5, "kept", title="full")]
        assert build_context(matches, 1000) == "[full#0] kept"

    def test_no_matches(self) -> None:
        assert build_context([], 1000) == ""


class TestComposeSystemPrompt:
    def test_context_then_system_prompt(self) -> None:
        assert (
            compose_system_prompt("[a#0] text", "Be concise.")
            == "Context:\n[a#0] text\n\nBe concise."
        )

    def test_without_context(self) -> None:
        assert compose_system_prompt("", "Be concise.") == "Be concise."

    def test_without_system_prompt(self) -> None:
        assert compose_system_prompt("[a#0] text") == "Context:\n[a#0] text"
