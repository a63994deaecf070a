"""Domain models for complytrack."""

from complytrack.models.checklist import (
    Checklist,
    ChecklistItem,
    Evidence,
    Status,
)
from complytrack.models.gap_analysis import (
    AnalysisOutcome,
    AnalysisOutcomeKind,
    EvidenceSummary,
    GapAnalysisRequest,
    GapAnalysisResponse,
    PartiallyCoveredItem,
    RequirementSummary,
)
from complytrack.models.report import (
    CategorySummary,
    ComplianceReport,
    Gap,
    GapReport,
    OverallStatus,
    ProgressSummary,
    Suggestion,
    SuggestionResponse,
    completion_percentage,
)

__all__ = [
    # Checklist
    "Checklist",
    "ChecklistItem",
    "Evidence",
    "Status",
    # Gap analysis
    "AnalysisOutcome",
    "AnalysisOutcomeKind",
    "EvidenceSummary",
    "GapAnalysisRequest",
    "GapAnalysisResponse",
    "PartiallyCoveredItem",
    "RequirementSummary",
    # Reports
    "CategorySummary",
    "ComplianceReport",
    "Gap",
    "GapReport",
    "OverallStatus",
    "ProgressSummary",
    "Suggestion",
    "SuggestionResponse",
    "completion_percentage",
]
