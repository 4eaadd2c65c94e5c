"""Document analysis tasks: summary, Q&A, insights and compliance."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List

from docinsight.analysis import prompts
from docinsight.config import AppConfig
from docinsight.llm.client import GenerationClient
from docinsight.models import (
    COMPLIANCE_STATUSES,
    SEVERITIES,
    Answer,
    ComplianceIssue,
    ComplianceReport,
    ConversationTurn,
    Insights,
)
from docinsight.retrieval.search import ContextRetriever
from docinsight.utils.text import preview, strip_code_fences, truncate

LOGGER = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Summary generation failed"
ANSWER_FALLBACK = "Unable to generate answer"
COMPLIANCE_SUMMARY_FALLBACK = "Compliance check completed."


def parse_json_object(content: str) -> Dict[str, Any] | None:
    """Parse model output as a JSON object, tolerating Markdown fences."""
    try:
        parsed = json.loads(strip_code_fences(content))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None and not isinstance(item, (dict, list))]


def _optional_str(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None


def default_compliance_report() -> ComplianceReport:
    return ComplianceReport(
        overall_compliance="needs-review",
        issues=[
            ComplianceIssue(
                severity="info",
                category="System Error",
                description="Unable to complete legal compliance check. Please try again.",
            )
        ],
        summary="An error occurred during the compliance check.",
        applicable_laws=[],
    )


def parse_insights(content: str) -> Insights:
    data = parse_json_object(content)
    if data is None:
        LOGGER.warning("Could not parse insights response, returning empty insights")
        return Insights()
    return Insights(
        dates=_string_list(data.get("dates")),
        people=_string_list(data.get("people")),
        organizations=_string_list(data.get("organizations")),
        action_items=_string_list(data.get("actionItems")),
        key_stats=_string_list(data.get("keyStats")),
    )


def _parse_issue(raw: Any) -> ComplianceIssue | None:
    if not isinstance(raw, dict) or not raw.get("description"):
        return None
    severity = raw.get("severity")
    return ComplianceIssue(
        severity=severity if severity in SEVERITIES else "info",
        category=str(raw.get("category") or "General"),
        description=str(raw["description"]),
        relevant_law=_optional_str(raw.get("relevantLaw")),
        recommendation=_optional_str(raw.get("recommendation")),
    )


def parse_compliance(content: str) -> ComplianceReport:
    data = parse_json_object(content)
    if data is None:
        LOGGER.warning("Could not parse compliance response, returning default report")
        return default_compliance_report()

    status = data.get("overallCompliance")
    raw_issues = data.get("issues")
    issues = [
        issue
        for issue in (_parse_issue(raw) for raw in (raw_issues if isinstance(raw_issues, list) else []))
        if issue is not None
    ]
    return ComplianceReport(
        overall_compliance=status if status in COMPLIANCE_STATUSES else "needs-review",
        issues=issues,
        summary=str(data.get("summary") or COMPLIANCE_SUMMARY_FALLBACK),
        applicable_laws=_string_list(data.get("applicableLaws")),
    )


class DocumentAnalyzer:
    """Runs each analysis task against an injected generation client.

    Errors raised by the client propagate unchanged. Only unparseable
    structured output is replaced by a default result.
    """

    def __init__(self, client: GenerationClient, config: AppConfig | None = None) -> None:
        self.client = client
        self.config = config or AppConfig()
        self.retriever = ContextRetriever(max_tokens=self.config.chunk_tokens)

    def _generate(self, prompt: str) -> str:
        return self.client.generate(prompt, self.config.model_id)

    def _document(self, text: str) -> str:
        return truncate(text, self.config.max_context_chars)

    def summarize(self, text: str) -> str:
        summary = self._generate(prompts.build_summary_prompt(self._document(text)))
        return summary or SUMMARY_FALLBACK

    def answer_question(
        self, text: str, question: str, history: Iterable[ConversationTurn] = ()
    ) -> Answer:
        chunk = self.retriever.retrieve(text, question)
        prompt = prompts.build_question_prompt(chunk.text, question, history)
        answer = self._generate(prompt)
        return Answer(answer=answer or ANSWER_FALLBACK, source=preview(chunk.text))

    def extract_insights(self, text: str) -> Insights:
        content = self._generate(prompts.build_insights_prompt(self._document(text)))
        return parse_insights(content)

    def check_compliance(self, text: str, jurisdiction: str = "switzerland") -> ComplianceReport:
        target = prompts.get_jurisdiction(jurisdiction)
        content = self._generate(prompts.build_compliance_prompt(self._document(text), target))
        return parse_compliance(content)
