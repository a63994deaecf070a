"""Checklist service: record evidence, recompute status, persist."""

import logging
import math
import threading

from complytrack.errors import ChecklistNotFoundError, InvalidInputError, ItemNotFoundError
from complytrack.models import Checklist, ChecklistItem, Evidence, ProgressSummary, Status
from complytrack.persistence import EvidenceStore
from complytrack.status_engine import compute_status
from complytrack.tracing.logger import log_service_event

logger = logging.getLogger(__name__)


def validate_evidence(evidence: Evidence) -> None:
    """Reject evidence the status rule cannot meaningfully compare.

    Raises:
        InvalidInputError: If the confidence is not a finite number in [0, 1]
            or the document is not identified.
    """
    confidence = evidence.confidence
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise InvalidInputError(f"Confidence must be a number, got {confidence!r}")
    if not math.isfinite(confidence) or not 0.0 <= confidence <= 1.0:
        raise InvalidInputError(f"Confidence must be between 0 and 1, got {confidence}")
    if not evidence.document_id.strip():
        raise InvalidInputError("documentId is required")
    if not evidence.document_name.strip():
        raise InvalidInputError("documentName is required")


class ChecklistService:
    """Read and update operations over the evidence store.

    Updates to one checklist are serialized with a lock per checklist ID.
    Updates to different checklists, and all reads, never wait on each other.
    """

    def __init__(self, store: EvidenceStore):
        self.store = store
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, checklist_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(checklist_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[checklist_id] = lock
            return lock

    def list_checklists(self) -> list[Checklist]:
        """List all checklists in a stable order."""
        return self.store.list_all()

    def get_checklist(self, checklist_id: str) -> Checklist:
        """Get a checklist by ID.

        Raises:
            ChecklistNotFoundError: If the checklist does not exist.
        """
        return self.store.get_or_raise(checklist_id)

    def update_item_status(
        self,
        checklist_id: str,
        item_id: str,
        evidence: Evidence | None = None,
        status_hint: Status | None = None,
    ) -> ChecklistItem:
        """Attach optional evidence to an item and recompute its status.

        The status is always recomputed from the item's full evidence list;
        ``status_hint`` is only compared against it and logged on mismatch.

        Args:
            checklist_id: ID of the checklist holding the item.
            item_id: ID of the item to update.
            evidence: New evidence to append before recomputing.
            status_hint: Status the caller expects. Never applied.

        Returns:
            The updated item.

        Raises:
            ChecklistNotFoundError: If the checklist does not exist.
            ItemNotFoundError: If the checklist has no such item.
            InvalidInputError: If the evidence is malformed.
        """
        if checklist_id not in self.store:
            raise ChecklistNotFoundError(checklist_id)

        with self._lock_for(checklist_id):
            checklist = self.store.get_or_raise(checklist_id)
            item = checklist.get_item(item_id)
            if item is None:
                raise ItemNotFoundError(checklist_id, item_id)
            if evidence is not None:
                validate_evidence(evidence)

            previous = item.status
            if evidence is not None:
                item.evidence.append(evidence)
            item.status = compute_status(item.evidence)

            self.store.save(checklist)

        if evidence is not None:
            log_service_event(
                "evidence_added",
                "checklist_service",
                f"{checklist_id}/{item_id} <- {evidence.document_name}",
                {"confidence": evidence.confidence, "evidence_count": len(item.evidence)},
            )
        if item.status != previous:
            log_service_event(
                "status_changed",
                "checklist_service",
                f"{checklist_id}/{item_id}: {previous.value} -> {item.status.value}",
            )
        if status_hint is not None and status_hint != item.status:
            logger.warning(
                "Ignoring client status %s for %s/%s; computed %s",
                status_hint.value,
                checklist_id,
                item_id,
                item.status.value,
            )
        return item

    def get_progress(self, checklist_id: str) -> ProgressSummary:
        """Count a checklist's items by status.

        Raises:
            ChecklistNotFoundError: If the checklist does not exist.
        """
        checklist = self.store.get_or_raise(checklist_id)
        return ProgressSummary.from_items(checklist.id, checklist.items)
