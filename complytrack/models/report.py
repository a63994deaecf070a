"""Derived progress and report models."""

from dataclasses import dataclass, field
from typing import Any

from complytrack.models.checklist import ChecklistItem, Status


def completion_percentage(completed: int, total: int) -> float:
    """Return completed/total as a percentage rounded to 2 decimals."""
    if total == 0:
        return 0.0
    return round(completed * 100.0 / total, 2)


@dataclass
class ProgressSummary:
    """Item counts for a checklist, grouped by status."""

    checklist_id: str
    total_items: int = 0
    completed_items: int = 0
    partial_items: int = 0
    pending_items: int = 0
    completion_percentage: float = 0.0

    @classmethod
    def from_items(cls, checklist_id: str, items: list[ChecklistItem]) -> "ProgressSummary":
        """Create a summary from a list of items."""
        summary = cls(checklist_id=checklist_id, total_items=len(items))
        for item in items:
            if item.status == Status.COMPLETED:
                summary.completed_items += 1
            elif item.status == Status.PARTIAL:
                summary.partial_items += 1
            else:
                summary.pending_items += 1
        summary.completion_percentage = completion_percentage(
            summary.completed_items, summary.total_items
        )
        return summary

    def to_dict(self) -> dict[str, Any]:
        return {
            "checklistId": self.checklist_id,
            "totalItems": self.total_items,
            "completedItems": self.completed_items,
            "partialItems": self.partial_items,
            "pendingItems": self.pending_items,
            "completionPercentage": self.completion_percentage,
        }


@dataclass
class OverallStatus:
    total_items: int
    completed_items: int
    partial_items: int
    pending_items: int
    completion_percentage: float

    @classmethod
    def from_progress(cls, progress: ProgressSummary) -> "OverallStatus":
        return cls(
            total_items=progress.total_items,
            completed_items=progress.completed_items,
            partial_items=progress.partial_items,
            pending_items=progress.pending_items,
            completion_percentage=progress.completion_percentage,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalItems": self.total_items,
            "completedItems": self.completed_items,
            "partialItems": self.partial_items,
            "pendingItems": self.pending_items,
            "completionPercentage": self.completion_percentage,
        }


@dataclass
class CategorySummary:
    """Completion rollup for one category."""

    category: str
    total: int = 0
    completed: int = 0
    percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "total": self.total,
            "completed": self.completed,
            "percentage": self.percentage,
        }


@dataclass
class ComplianceReport:
    """Point-in-time compliance view of a checklist."""

    checklist_id: str
    checklist_name: str
    generated_at: str
    overall_status: OverallStatus
    category_summaries: dict[str, CategorySummary] = field(default_factory=dict)
    completed_requirements: list[str] = field(default_factory=list)
    partial_requirements: list[str] = field(default_factory=list)
    pending_requirements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "checklistId": self.checklist_id,
            "checklistName": self.checklist_name,
            "generatedAt": self.generated_at,
            "overallStatus": self.overall_status.to_dict(),
            "categorySummaries": {
                name: summary.to_dict() for name, summary in self.category_summaries.items()
            },
            "completedRequirements": list(self.completed_requirements),
            "partialRequirements": list(self.partial_requirements),
            "pendingRequirements": list(self.pending_requirements),
        }


NO_EVIDENCE_REASON = "No evidence provided"
INCOMPLETE_EVIDENCE_REASON = "Incomplete evidence"


@dataclass
class Gap:
    """A checklist item that is not yet COMPLETED."""

    requirement_id: str
    requirement: str
    category: str
    status: Status
    reason: str

    @classmethod
    def from_item(cls, item: ChecklistItem) -> "Gap":
        return cls(
            requirement_id=item.id,
            requirement=item.requirement,
            category=item.category,
            status=item.status,
            reason=INCOMPLETE_EVIDENCE_REASON if item.has_evidence else NO_EVIDENCE_REASON,
        )

    @property
    def label(self) -> str:
        return f"{self.requirement_id}: {self.requirement}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirementId": self.requirement_id,
            "requirement": self.requirement,
            "category": self.category,
            "status": self.status.value,
            "reason": self.reason,
        }


@dataclass
class GapReport:
    """Gaps of a checklist with critical gaps and recommendations."""

    checklist_id: str
    generated_at: str
    gaps: list[Gap] = field(default_factory=list)
    critical_gaps: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    analysis_source: str = "none"  # "collaborator", "fallback" or "none"

    def to_dict(self) -> dict[str, Any]:
        return {
            "checklistId": self.checklist_id,
            "generatedAt": self.generated_at,
            "gaps": [g.to_dict() for g in self.gaps],
            "criticalGaps": list(self.critical_gaps),
            "recommendations": list(self.recommendations),
            "analysisSource": self.analysis_source,
        }


@dataclass
class Suggestion:
    gap: str
    recommendation: str
    priority: str  # "HIGH" or "MEDIUM"
    action_items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "gap": self.gap,
            "recommendation": self.recommendation,
            "priority": self.priority,
            "actionItems": list(self.action_items),
        }


@dataclass
class SuggestionResponse:
    suggestions: list[Suggestion]
    generated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "generatedAt": self.generated_at,
        }
