"""complytrack: compliance checklist tracking and reporting."""

from complytrack.errors import (
    ChecklistNotFoundError,
    InvalidInputError,
    ItemNotFoundError,
    NotFoundError,
)
from complytrack.models import Checklist, ChecklistItem, Evidence, Status
from complytrack.status_engine import compute_status

__version__ = "0.1.0"

__all__ = [
    "Checklist",
    "ChecklistItem",
    "Evidence",
    "Status",
    "compute_status",
    "NotFoundError",
    "ChecklistNotFoundError",
    "ItemNotFoundError",
    "InvalidInputError",
]
