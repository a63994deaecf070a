"""Readers the report engine uses to fetch checklist snapshots."""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

import httpx

from complytrack.errors import ChecklistNotFoundError, ChecklistServiceError
from complytrack.models import Checklist
from complytrack.services import ChecklistService


class ChecklistReader(Protocol):
    """Read side of the checklist service as seen by the report engine."""

    async def fetch_checklist(self, checklist_id: str) -> Checklist:
        """Return a snapshot of the checklist or raise ChecklistNotFoundError."""
        ...


class LocalChecklistReader:
    """Reads checklists from an in-process ChecklistService."""

    def __init__(self, service: ChecklistService):
        self.service = service

    async def fetch_checklist(self, checklist_id: str) -> Checklist:
        return self.service.get_checklist(checklist_id)


class ChecklistServiceClient:
    """Reads checklists from a remote checklist service over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def fetch_checklist(self, checklist_id: str) -> Checklist:
        """Fetch a checklist by ID.

        Raises:
            ChecklistNotFoundError: If the service answers 404.
            ChecklistServiceError: If the service is unreachable or answers
                with an error or an unreadable body.
        """
        # IDs are opaque; "?", "#" and "/" must not change the path
        url = f"{self.base_url}/api/checklists/{quote(checklist_id, safe='')}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise ChecklistServiceError(f"Checklist service error: {e}") from e

        if response.status_code == 404:
            raise ChecklistNotFoundError(checklist_id)
        if response.is_error:
            raise ChecklistServiceError(
                f"HTTP {response.status_code}: {response.text}"
            )

        try:
            return Checklist.from_dict(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise ChecklistServiceError(f"Invalid checklist payload: {e}") from e
