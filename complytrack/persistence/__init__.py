"""Checklist persistence for complytrack."""

from complytrack.persistence.evidence_store import (
    EvidenceStore,
    get_evidence_store,
    reset_evidence_store,
)

__all__ = [
    "EvidenceStore",
    "get_evidence_store",
    "reset_evidence_store",
]
