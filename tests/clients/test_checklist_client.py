"""Checklist reader tests."""

import httpx
import pytest

from complytrack.catalog import seed_store
from complytrack.clients import ChecklistServiceClient, LocalChecklistReader
from complytrack.errors import ChecklistNotFoundError, ChecklistServiceError
from complytrack.models import Status
from complytrack.persistence import EvidenceStore
from complytrack.services import ChecklistService

REMOTE_CHECKLIST = {
    "id": "iso-27001-simplified",
    "name": "ISO 27001 Essential Controls",
    "description": "Simplified ISO 27001 compliance checklist",
    "items": [
        {
            "id": "AC-1",
            "category": "Access Control",
            "requirement": "Password policy documented and enforced",
            "hints": ["password policy"],
            "status": "COMPLETED",
            "evidence": [
                {
                    "documentId": "doc-1",
                    "documentName": "password-policy.pdf",
                    "confidence": 0.85,
                    "uploadedAt": "2024-05-01T10:00:00Z",
                    "relevantSections": "Section 2",
                }
            ],
        },
        {
            "id": "AC-2",
            "category": "Access Control",
            "requirement": "User access reviews conducted quarterly",
            "hints": [],
            "status": "PENDING",
            "evidence": [],
        },
    ],
}


def _client(handler) -> ChecklistServiceClient:
    return ChecklistServiceClient(
        "http://checklists.test", transport=httpx.MockTransport(handler)
    )


class TestChecklistServiceClient:
    """Tests for the HTTP checklist reader."""

    @pytest.mark.asyncio
    async def test_fetch_checklist(self):
        def handler(request):
            assert request.url.path == "/api/checklists/iso-27001-simplified"
            return httpx.Response(200, json=REMOTE_CHECKLIST)

        checklist = await _client(handler).fetch_checklist("iso-27001-simplified")

        assert checklist.name == "ISO 27001 Essential Controls"
        first = checklist.items[0]
        assert first.status == Status.COMPLETED
        assert first.evidence[0].document_name == "password-policy.pdf"
        assert first.evidence[0].uploaded_at.year == 2024
        assert checklist.items[1].evidence == []

    @pytest.mark.asyncio
    async def test_404_is_not_found(self):
        with pytest.raises(ChecklistNotFoundError):
            await _client(lambda r: httpx.Response(404)).fetch_checklist("does-not-exist")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "checklist_id, raw_path",
        [
            ("iso?x=1", b"/api/checklists/iso%3Fx%3D1"),
            ("iso#frag", b"/api/checklists/iso%23frag"),
            ("iso/items", b"/api/checklists/iso%2Fitems"),
        ],
    )
    async def test_id_is_encoded_in_path(self, checklist_id, raw_path):
        seen = []

        def handler(request):
            seen.append(request.url.raw_path)
            if request.url.path == "/api/checklists/iso":
                return httpx.Response(200, json={**REMOTE_CHECKLIST, "id": "iso"})
            return httpx.Response(404)

        with pytest.raises(ChecklistNotFoundError):
            await _client(handler).fetch_checklist(checklist_id)
        assert seen == [raw_path]

    @pytest.mark.asyncio
    async def test_server_error_raises_service_error(self):
        with pytest.raises(ChecklistServiceError):
            await _client(lambda r: httpx.Response(500, text="down")).fetch_checklist("x")

    @pytest.mark.asyncio
    async def test_unreachable_raises_service_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ChecklistServiceError):
            await _client(handler).fetch_checklist("x")


class TestLocalChecklistReader:
    """Tests for the in-process checklist reader."""

    @pytest.mark.asyncio
    async def test_reads_from_service(self):
        store = EvidenceStore()
        seed_store(store)
        reader = LocalChecklistReader(ChecklistService(store))

        checklist = await reader.fetch_checklist("iso-27001-simplified")
        assert len(checklist.items) == 10

    @pytest.mark.asyncio
    async def test_not_found(self):
        reader = LocalChecklistReader(ChecklistService(EvidenceStore()))
        with pytest.raises(ChecklistNotFoundError):
            await reader.fetch_checklist("does-not-exist")
