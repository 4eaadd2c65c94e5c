"""Prompt templates for each analysis task."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from docinsight.models import ConversationTurn

SUMMARY_PREAMBLE = (
    "You are a document summarization expert. "
    "Create concise, accurate summaries with key insights."
)

QUESTION_PREAMBLE = (
    "You are a helpful assistant that answers questions based on the provided "
    "document context. Always cite which part of the document you used."
)

INSIGHTS_PREAMBLE = (
    "You are an expert at extracting structured information from documents. "
    "Return JSON format only."
)


@dataclass(frozen=True, slots=True)
class Jurisdiction:
    name: str
    adjective: str
    focus_areas: Tuple[str, ...]


SWITZERLAND = Jurisdiction(
    name="Switzerland",
    adjective="Swiss",
    focus_areas=(
        "Data Protection (DSG - Datenschutzgesetz, GDPR compliance in Switzerland)",
        "Employment Law (OR - Obligationenrecht, Labor Law)",
        "Contract Law (Swiss Code of Obligations)",
        "Consumer Protection (Konsumentenschutzgesetz)",
        "Corporate Law (OR, Aktiengesetz)",
        "Financial Regulations (FINMA regulations)",
        "Privacy and Data Security",
        "Anti-discrimination laws",
        "Environmental regulations (Umweltschutzgesetz)",
        "Tax compliance (Swiss tax law)",
    ),
)

JURISDICTIONS: Dict[str, Jurisdiction] = {
    "switzerland": SWITZERLAND,
    "ch": SWITZERLAND,
}


def get_jurisdiction(name: str) -> Jurisdiction:
    try:
        return JURISDICTIONS[name.strip().lower()]
    except KeyError:
        supported = ", ".join(sorted(JURISDICTIONS))
        raise ValueError(f"Unsupported jurisdiction {name!r}. Supported: {supported}") from None


def build_summary_prompt(text: str) -> str:
    return (
        f"{SUMMARY_PREAMBLE}\n\n"
        "Summarize this document in exactly 3 sentences, then provide 5-7 key bullet points:\n\n"
        f"{text}"
    )


def format_history(history: Iterable[ConversationTurn]) -> str:
    """Render earlier turns as ``User:``/``Assistant:`` lines."""
    lines = [f"{turn.label}: {turn.content}" for turn in history]
    if not lines:
        return ""
    return "\n\nPrevious conversation:\n" + "\n".join(lines) + "\n"


def build_question_prompt(
    context: str, question: str, history: Iterable[ConversationTurn] = ()
) -> str:
    return (
        f"{QUESTION_PREAMBLE}\n\n"
        "Document context:\n\n"
        f"{context}{format_history(history)}\n\n"
        f"Question: {question}\n\n"
        "Answer the question based on the document context above. "
        "If the answer is not in the context, say so."
    )


def build_insights_prompt(text: str) -> str:
    return f"""{INSIGHTS_PREAMBLE}

Extract the following from this document and return as JSON:
- dates: Array of important dates and deadlines
- people: Array of people mentioned
- organizations: Array of organizations/companies mentioned
- actionItems: Array of tasks or action items
- keyStats: Array of important statistics or numbers

Document:

{text}

Return only valid JSON, no markdown formatting. Format: {{"dates": [], "people": [], "organizations": [], "actionItems": [], "keyStats": []}}"""


def build_compliance_prompt(text: str, jurisdiction: Jurisdiction = SWITZERLAND) -> str:
    focus = "\n".join(f"{number}. {area}" for number, area in enumerate(jurisdiction.focus_areas, 1))
    return f"""You are a {jurisdiction.adjective} legal compliance expert. Analyze the following document against {jurisdiction.adjective} laws and regulations. Focus on:

{focus}

Document:

{text}

Analyze the document and return a JSON object with:
- overallCompliance: "compliant", "non-compliant", or "needs-review"
- issues: Array of objects with:
  - severity: "critical", "warning", or "info"
  - category: The legal area (e.g., "Data Protection", "Employment Law")
  - description: Clear description of the issue
  - relevantLaw: The specific {jurisdiction.adjective} law or regulation (if applicable)
  - recommendation: Suggested action (if applicable)
- summary: A brief 2-3 sentence summary of compliance status
- applicableLaws: Array of {jurisdiction.adjective} laws that are relevant to this document

Return only valid JSON, no markdown formatting. Format:
{{
  "overallCompliance": "compliant" | "non-compliant" | "needs-review",
  "issues": [
    {{
      "severity": "critical" | "warning" | "info",
      "category": "string",
      "description": "string",
      "relevantLaw": "string (optional)",
      "recommendation": "string (optional)"
    }}
  ],
  "summary": "string",
  "applicableLaws": ["string"]
}}"""
