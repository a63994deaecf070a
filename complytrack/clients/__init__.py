"""Clients for the services complytrack talks to."""

from complytrack.clients.checklist_client import (
    ChecklistReader,
    ChecklistServiceClient,
    LocalChecklistReader,
)
from complytrack.clients.evidence_analyzer import EvidenceAnalyzerClient

__all__ = [
    "ChecklistReader",
    "ChecklistServiceClient",
    "LocalChecklistReader",
    "EvidenceAnalyzerClient",
]
