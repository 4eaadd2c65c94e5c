"""Tests for prompt templates."""

from __future__ import annotations

import pytest

from docinsight.analysis.prompts import (
    SWITZERLAND,
    build_compliance_prompt,
    build_insights_prompt,
    build_question_prompt,
    build_summary_prompt,
    format_history,
    get_jurisdiction,
)
from docinsight.models import ConversationTurn


class TestQuestionPrompt:
    """Test build_question_prompt."""

    def test_contains_context_and_question(self) -> None:
        prompt = build_question_prompt("chunk text here", "What is due?")

        assert "Document context:\n\nchunk text here" in prompt
        assert "Question: What is due?" in prompt
        assert "Previous conversation" not in prompt
        assert "If the answer is not in the context, say so." in prompt

    def test_includes_history_in_order(self) -> None:
        history = [
            ConversationTurn(role="user", content="First question"),
            ConversationTurn(role="assistant", content="First answer"),
        ]

        prompt = build_question_prompt("ctx", "Follow up?", history)

        assert "Previous conversation:\nUser: First question\nAssistant: First answer\n" in prompt
        assert prompt.index("Previous conversation") < prompt.index("Question: Follow up?")

    def test_format_history_empty(self) -> None:
        assert format_history([]) == ""


class TestTaskPrompts:
    """Test whole-document prompts."""

    def test_summary_prompt(self) -> None:
        prompt = build_summary_prompt("document body")

        assert "exactly 3 sentences" in prompt
        assert prompt.endswith("document body")

    def test_insights_prompt_lists_keys(self) -> None:
        prompt = build_insights_prompt("document body")

        for key in ("dates", "people", "organizations", "actionItems", "keyStats"):
            assert key in prompt
        assert '{"dates": [], "people": []' in prompt

    def test_compliance_prompt_lists_focus_areas(self) -> None:
        prompt = build_compliance_prompt("document body")

        assert "Swiss legal compliance expert" in prompt
        assert "1. Data Protection (DSG" in prompt
        assert f"{len(SWITZERLAND.focus_areas)}. Tax compliance" in prompt
        assert '"overallCompliance": "compliant" | "non-compliant" | "needs-review"' in prompt


class TestJurisdiction:
    """Test jurisdiction lookup."""

    @pytest.mark.parametrize("name", ["switzerland", "Switzerland", " CH "])
    def test_lookup(self, name: str) -> None:
        assert get_jurisdiction(name) is SWITZERLAND

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unsupported jurisdiction"):
            get_jurisdiction("atlantis")
