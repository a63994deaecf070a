"""EvidenceAnalyzerClient tests."""

import json

import httpx
import pytest

from complytrack.clients import EvidenceAnalyzerClient
from complytrack.models import (
    AnalysisOutcomeKind,
    EvidenceSummary,
    GapAnalysisRequest,
    RequirementSummary,
)


@pytest.fixture
def gap_request():
    return GapAnalysisRequest(
        requirements=[
            RequirementSummary(id="AC-1", requirement="Password policy", status="PARTIAL"),
            RequirementSummary(id="DP-1", requirement="Backup policy", status="PENDING"),
        ],
        evidence_list=[EvidenceSummary(document_name="pw.pdf", requirement="Password policy")],
    )


def _client(handler) -> EvidenceAnalyzerClient:
    return EvidenceAnalyzerClient(
        "http://analyzer.test/",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestEvidenceAnalyzerClient:
    """Tests for analyze_gaps outcomes."""

    @pytest.mark.asyncio
    async def test_received_response(self, gap_request):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "uncoveredRequirements": ["DP-1"],
                    "partiallyCovered": [{"requirement": "AC-1", "reason": "No enforcement"}],
                    "criticalGaps": ["DP-1: Backup policy"],
                    "suggestions": ["Write a backup policy"],
                },
            )

        outcome = await _client(handler).analyze_gaps(gap_request)

        assert seen["url"] == "http://analyzer.test/api/analyze/gaps"
        assert seen["body"]["requirements"][0] == {
            "id": "AC-1",
            "requirement": "Password policy",
            "status": "PARTIAL",
        }
        assert seen["body"]["evidenceList"] == [
            {"documentName": "pw.pdf", "requirement": "Password policy"}
        ]
        assert outcome.kind == AnalysisOutcomeKind.RECEIVED
        assert outcome.suggestions == ["Write a backup policy"]
        assert outcome.critical_gaps == ["DP-1: Backup policy"]
        assert outcome.response.partially_covered[0].reason == "No enforcement"

    @pytest.mark.asyncio
    async def test_absent_fields_are_empty(self, gap_request):
        def handler(request):
            return httpx.Response(200, json={"suggestions": None})

        outcome = await _client(handler).analyze_gaps(gap_request)

        assert outcome.kind == AnalysisOutcomeKind.RECEIVED
        assert outcome.suggestions == []
        assert outcome.critical_gaps == []
        assert outcome.response.uncovered_requirements == []

    @pytest.mark.asyncio
    async def test_empty_body_is_empty_outcome(self, gap_request):
        outcome = await _client(lambda r: httpx.Response(200, content=b"")).analyze_gaps(gap_request)
        assert outcome.kind == AnalysisOutcomeKind.EMPTY

    @pytest.mark.asyncio
    async def test_json_null_is_empty_outcome(self, gap_request):
        outcome = await _client(lambda r: httpx.Response(200, content=b"null")).analyze_gaps(
            gap_request
        )
        assert outcome.kind == AnalysisOutcomeKind.EMPTY

    @pytest.mark.asyncio
    async def test_server_error_is_failed_outcome(self, gap_request):
        outcome = await _client(lambda r: httpx.Response(500, text="boom")).analyze_gaps(
            gap_request
        )
        assert outcome.kind == AnalysisOutcomeKind.FAILED
        assert "HTTP 500" in outcome.error

    @pytest.mark.asyncio
    async def test_unreachable_is_failed_outcome(self, gap_request):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        outcome = await _client(handler).analyze_gaps(gap_request)

        assert outcome.kind == AnalysisOutcomeKind.FAILED
        assert "connection refused" in outcome.error

    @pytest.mark.asyncio
    async def test_timeout_is_failed_outcome(self, gap_request):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        outcome = await _client(handler).analyze_gaps(gap_request)
        assert outcome.kind == AnalysisOutcomeKind.FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [b"not json", b"[1, 2, 3]", b'{"suggestions": "not a list"}'],
    )
    async def test_malformed_body_is_failed_outcome(self, gap_request, content):
        outcome = await _client(lambda r: httpx.Response(200, content=content)).analyze_gaps(
            gap_request
        )
        assert outcome.kind == AnalysisOutcomeKind.FAILED
        assert "Malformed" in outcome.error

    @pytest.mark.asyncio
    async def test_single_attempt_without_retry(self, gap_request):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        await _client(handler).analyze_gaps(gap_request)
        assert len(calls) == 1
