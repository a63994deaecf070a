"""Checklist, item and evidence models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Status(str, Enum):
    """Completion status of a checklist item."""

    PENDING = "PENDING"  # No usable evidence yet
    PARTIAL = "PARTIAL"  # Some evidence, not conclusive
    COMPLETED = "COMPLETED"  # Requirement covered by strong evidence

    @property
    def rank(self) -> int:
        """Position in the COMPLETED > PARTIAL > PENDING ordering."""
        return _STATUS_RANK[self]


_STATUS_RANK = {
    Status.PENDING: 0,
    Status.PARTIAL: 1,
    Status.COMPLETED: 2,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_dt(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        # UTC timestamps may carry a trailing "Z"
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return _utc_now()


@dataclass(frozen=True)
class Evidence:
    """A document uploaded in support of a checklist item.

    Evidence is never edited or removed once it is attached to an item.
    """

    document_id: str
    document_name: str
    confidence: float  # Analyzer confidence, expected in 0-1
    uploaded_at: datetime = field(default_factory=_utc_now)
    relevant_sections: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert evidence to its camelCase wire form."""
        return {
            "documentId": self.document_id,
            "documentName": self.document_name,
            "confidence": self.confidence,
            "uploadedAt": self.uploaded_at.isoformat(),
            "relevantSections": self.relevant_sections,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Evidence":
        """Build evidence from its camelCase wire form."""
        return cls(
            document_id=data.get("documentId", ""),
            document_name=data.get("documentName", ""),
            confidence=float(data.get("confidence", 0.0)),
            uploaded_at=_parse_dt(data.get("uploadedAt")),
            relevant_sections=data.get("relevantSections") or "",
        )


@dataclass
class ChecklistItem:
    """A single compliance requirement inside a checklist."""

    id: str  # e.g., "AC-1"
    category: str  # e.g., "Access Control"
    requirement: str
    hints: list[str] = field(default_factory=list)  # Search aids for analyzers
    status: Status = Status.PENDING
    evidence: list[Evidence] = field(default_factory=list)

    @property
    def label(self) -> str:
        """The "id: requirement" string used throughout reports."""
        return f"{self.id}: {self.requirement}"

    @property
    def has_evidence(self) -> bool:
        return bool(self.evidence)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "requirement": self.requirement,
            "hints": list(self.hints),
            "status": self.status.value,
            "evidence": [e.to_dict() for e in self.evidence],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChecklistItem":
        return cls(
            id=data["id"],
            category=data.get("category", ""),
            requirement=data.get("requirement", ""),
            hints=list(data.get("hints") or []),
            status=Status(data.get("status") or Status.PENDING.value),
            evidence=[Evidence.from_dict(e) for e in data.get("evidence") or []],
        )


@dataclass
class Checklist:
    """A named collection of compliance items.

    Examples:
    - ISO 27001 Essential Controls
    - SOC2 readiness
    """

    id: str  # e.g., "iso-27001-simplified"
    name: str
    description: str = ""
    items: list[ChecklistItem] = field(default_factory=list)

    def get_item(self, item_id: str) -> ChecklistItem | None:
        """Get an item by ID."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def get_items_by_status(self, status: Status) -> list[ChecklistItem]:
        """Get all items currently in a status, in checklist order."""
        return [i for i in self.items if i.status == status]

    @property
    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(i.category for i in self.items))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "items": [i.to_dict() for i in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Checklist":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description") or "",
            items=[ChecklistItem.from_dict(i) for i in data.get("items") or []],
        )
