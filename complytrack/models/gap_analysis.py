"""Request, response and outcome models for the gap analysis service."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from complytrack.models.checklist import Checklist


@dataclass
class RequirementSummary:
    id: str
    requirement: str
    status: str


@dataclass
class EvidenceSummary:
    document_name: str
    requirement: str  # Requirement text of the item owning the evidence


@dataclass
class GapAnalysisRequest:
    """Summary of a checklist sent to the gap analysis service."""

    requirements: list[RequirementSummary] = field(default_factory=list)
    evidence_list: list[EvidenceSummary] = field(default_factory=list)

    @classmethod
    def from_checklist(cls, checklist: Checklist) -> "GapAnalysisRequest":
        """Summarize every item and every evidence record of a checklist."""
        requirements = [
            RequirementSummary(id=item.id, requirement=item.requirement, status=item.status.value)
            for item in checklist.items
        ]
        evidence_list = [
            EvidenceSummary(document_name=ev.document_name, requirement=item.requirement)
            for item in checklist.items
            for ev in item.evidence
        ]
        return cls(requirements=requirements, evidence_list=evidence_list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "requirements": [
                {"id": r.id, "requirement": r.requirement, "status": r.status}
                for r in self.requirements
            ],
            "evidenceList": [
                {"documentName": e.document_name, "requirement": e.requirement}
                for e in self.evidence_list
            ],
        }


@dataclass
class PartiallyCoveredItem:
    requirement: str
    reason: str


@dataclass
class GapAnalysisResponse:
    """Gap analysis returned by the collaborator.

    Absent fields are represented as empty lists.
    """

    uncovered_requirements: list[str] = field(default_factory=list)
    partially_covered: list[PartiallyCoveredItem] = field(default_factory=list)
    critical_gaps: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


class AnalysisOutcomeKind(str, Enum):
    """How a gap analysis call ended."""

    RECEIVED = "received"  # Service answered with a usable body
    EMPTY = "empty"  # Service answered without data
    FAILED = "failed"  # Call failed; error absorbed


@dataclass
class AnalysisOutcome:
    """Typed result of a gap analysis call. Never raised, always returned."""

    kind: AnalysisOutcomeKind
    response: GapAnalysisResponse | None = None
    error: str | None = None

    @classmethod
    def received(cls, response: GapAnalysisResponse) -> "AnalysisOutcome":
        return cls(kind=AnalysisOutcomeKind.RECEIVED, response=response)

    @classmethod
    def empty(cls) -> "AnalysisOutcome":
        return cls(kind=AnalysisOutcomeKind.EMPTY)

    @classmethod
    def failed(cls, error: str) -> "AnalysisOutcome":
        return cls(kind=AnalysisOutcomeKind.FAILED, error=error)

    @property
    def suggestions(self) -> list[str]:
        return self.response.suggestions if self.response else []

    @property
    def critical_gaps(self) -> list[str]:
        return self.response.critical_gaps if self.response else []
