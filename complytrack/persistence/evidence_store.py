"""In-memory keyed store for checklists and their evidence."""

import copy
from pathlib import Path
from typing import Any

import yaml

from complytrack.errors import ChecklistNotFoundError
from complytrack.models import Checklist, ChecklistItem
from complytrack.status_engine import compute_status


class EvidenceStore:
    """Store for checklists keyed by checklist ID.

    Holds no business logic. Reads hand out detached copies and writes replace
    the whole checklist, so a caller never observes a half-applied update.
    """

    def __init__(self):
        self._checklists: dict[str, Checklist] = {}

    def register(self, checklist: Checklist) -> None:
        """Seed a checklist.

        Args:
            checklist: The checklist to add.

        Raises:
            ValueError: If a checklist with the same ID already exists.
        """
        if checklist.id in self._checklists:
            raise ValueError(f"Checklist '{checklist.id}' already registered")
        self._checklists[checklist.id] = copy.deepcopy(checklist)

    def get(self, checklist_id: str) -> Checklist | None:
        """Get a copy of a checklist by ID, or None if not found."""
        checklist = self._checklists.get(checklist_id)
        if checklist is None:
            return None
        return copy.deepcopy(checklist)

    def get_or_raise(self, checklist_id: str) -> Checklist:
        """Get a copy of a checklist by ID.

        Raises:
            ChecklistNotFoundError: If the checklist does not exist.
        """
        checklist = self.get(checklist_id)
        if checklist is None:
            raise ChecklistNotFoundError(checklist_id)
        return checklist

    def save(self, checklist: Checklist) -> Checklist:
        """Replace the stored checklist with the given one."""
        self._checklists[checklist.id] = copy.deepcopy(checklist)
        return checklist

    def list_all(self) -> list[Checklist]:
        """List copies of all checklists in registration order."""
        return [copy.deepcopy(c) for c in list(self._checklists.values())]

    def list_ids(self) -> list[str]:
        return list(self._checklists.keys())

    def load_from_yaml(self, path: str | Path) -> Checklist:
        """Load a checklist definition from a YAML file and register it.

        Args:
            path: Path to the YAML file.

        Returns:
            The loaded checklist.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        checklist = self._parse_checklist(data)
        self.register(checklist)
        return checklist

    def load_from_directory(self, directory: str | Path) -> list[Checklist]:
        """Load all checklist definitions from a directory."""
        directory = Path(directory)
        loaded = []
        for yaml_file in sorted([*directory.glob("*.yaml"), *directory.glob("*.yml")]):
            loaded.append(self.load_from_yaml(yaml_file))
        return loaded

    def _parse_checklist(self, data: dict[str, Any]) -> Checklist:
        """Parse checklist data from a dictionary."""
        items = []
        for item_data in data.get("items", []):
            item = ChecklistItem(
                id=item_data["id"],
                category=item_data["category"],
                requirement=item_data["requirement"],
                hints=item_data.get("hints", []),
            )
            # Seeded items carry no evidence, so this is always PENDING
            item.status = compute_status(item.evidence)
            items.append(item)

        return Checklist(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            items=items,
        )

    def __len__(self) -> int:
        return len(self._checklists)

    def __contains__(self, checklist_id: str) -> bool:
        return checklist_id in self._checklists


# Global store instance
_default_store: EvidenceStore | None = None


def get_evidence_store() -> EvidenceStore:
    """Get the default evidence store."""
    global _default_store
    if _default_store is None:
        _default_store = EvidenceStore()
    return _default_store


def reset_evidence_store() -> None:
    """Drop the default store so the next call starts empty."""
    global _default_store
    _default_store = None
