"""Application services for complytrack."""

from complytrack.services.checklist_service import ChecklistService, validate_evidence

__all__ = [
    "ChecklistService",
    "validate_evidence",
]
