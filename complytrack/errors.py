"""Error types shared by the checklist and report services."""


class ComplyTrackError(Exception):
    """Base class for complytrack errors."""

    pass


class NotFoundError(ComplyTrackError):
    """Raised when a checklist or checklist item does not exist."""

    pass


class ChecklistNotFoundError(NotFoundError):
    """Raised when no checklist has the requested ID."""

    def __init__(self, checklist_id: str):
        super().__init__(f"Checklist not found: {checklist_id}")
        self.checklist_id = checklist_id


class ItemNotFoundError(NotFoundError):
    """Raised when a checklist has no item with the requested ID."""

    def __init__(self, checklist_id: str, item_id: str):
        super().__init__(f"Item '{item_id}' not found in checklist '{checklist_id}'")
        self.checklist_id = checklist_id
        self.item_id = item_id


class InvalidInputError(ComplyTrackError):
    """Raised when an update carries malformed evidence."""

    pass


class CollaboratorUnavailableError(ComplyTrackError):
    """Raised when the gap analysis service cannot be used.

    Only raised inside the analyzer client, which converts it into a
    failed analysis outcome.
    """

    pass


class ChecklistServiceError(ComplyTrackError):
    """Raised when a remote checklist service fails for a reason other than 404."""

    pass
