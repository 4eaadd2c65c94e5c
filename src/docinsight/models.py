"""Core DocInsight data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

Role = Literal["user", "assistant"]
Severity = Literal["critical", "warning", "info"]
ComplianceStatus = Literal["compliant", "non-compliant", "needs-review"]
FileType = Literal["pdf", "docx", "txt", "md"]

ROLES: tuple[str, ...] = ("user", "assistant")
SEVERITIES: tuple[str, ...] = ("critical", "warning", "info")
COMPLIANCE_STATUSES: tuple[str, ...] = ("compliant", "non-compliant", "needs-review")


@dataclass(frozen=True, slots=True)
class Chunk:
    """Contiguous run of document words rejoined with single spaces."""

    index: int
    text: str
    token_count: int


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """A previous message exchanged about the document."""

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unsupported conversation role: {self.role!r}")

    @property
    def label(self) -> str:
        return "User" if self.role == "user" else "Assistant"


@dataclass(slots=True)
class Answer:
    answer: str
    source: str


@dataclass(slots=True)
class Insights:
    """Structured facts pulled out of a document."""

    dates: List[str] = field(default_factory=list)
    people: List[str] = field(default_factory=list)
    organizations: List[str] = field(default_factory=list)
    action_items: List[str] = field(default_factory=list)
    key_stats: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "dates": list(self.dates),
            "people": list(self.people),
            "organizations": list(self.organizations),
            "actionItems": list(self.action_items),
            "keyStats": list(self.key_stats),
        }


@dataclass(slots=True)
class ComplianceIssue:
    severity: Severity
    category: str
    description: str
    relevant_law: Optional[str] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "severity": self.severity,
            "category": self.category,
            "description": self.description,
        }
        if self.relevant_law:
            data["relevantLaw"] = self.relevant_law
        if self.recommendation:
            data["recommendation"] = self.recommendation
        return data


@dataclass(slots=True)
class ComplianceReport:
    """Outcome of a jurisdiction-specific compliance review."""

    overall_compliance: ComplianceStatus
    issues: List[ComplianceIssue]
    summary: str
    applicable_laws: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallCompliance": self.overall_compliance,
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary,
            "applicableLaws": list(self.applicable_laws),
        }


@dataclass(slots=True)
class ExtractedDocument:
    """Text extracted from an uploaded file together with file details."""

    text: str
    file_name: str
    file_size: int
    file_type: FileType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "fileType": self.file_type,
        }
