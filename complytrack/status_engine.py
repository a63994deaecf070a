"""Status determination for checklist items."""

from collections.abc import Iterable

from complytrack.models import Evidence, Status

COMPLETED_THRESHOLD = 0.7
PARTIAL_THRESHOLD = 0.3


def compute_status(evidence: Iterable[Evidence]) -> Status:
    """Compute an item's status from all of its evidence.

    The best evidence ever submitted decides the status, so appending weaker
    evidence later never lowers it. Confidence values are compared as given,
    without clamping.

    Args:
        evidence: Every evidence record attached to the item.

    Returns:
        COMPLETED if the highest confidence is above 0.7, PARTIAL if it is
        above 0.3, otherwise PENDING. An empty list is PENDING.
    """
    confidences = [e.confidence for e in evidence]
    if not confidences:
        return Status.PENDING

    max_confidence = max(confidences)
    if max_confidence > COMPLETED_THRESHOLD:
        return Status.COMPLETED
    if max_confidence > PARTIAL_THRESHOLD:
        return Status.PARTIAL
    return Status.PENDING

