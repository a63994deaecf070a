"""Seed checklist catalog shipped with complytrack."""

from pathlib import Path

from complytrack.models import Checklist
from complytrack.persistence import EvidenceStore

CATALOG_DIR = Path(__file__).resolve().parent


def seed_store(store: EvidenceStore, directory: str | Path | None = None) -> list[Checklist]:
    """Load the catalog into a store that has not been seeded yet.

    Args:
        store: Store to seed.
        directory: Directory of YAML checklists; defaults to the bundled catalog.

    Returns:
        The checklists that were loaded, empty if the store was already seeded.
    """
    if len(store):
        return []
    return store.load_from_directory(directory or CATALOG_DIR)
