"""Client for the external gap analysis (evidence analyzer) service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from complytrack.errors import CollaboratorUnavailableError
from complytrack.models import (
    AnalysisOutcome,
    GapAnalysisRequest,
    GapAnalysisResponse,
    PartiallyCoveredItem,
)
from complytrack.tracing.logger import log_service_event

logger = logging.getLogger(__name__)

GAPS_PATH = "/api/analyze/gaps"


class PartiallyCoveredPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    requirement: str = ""
    reason: str = ""


class GapAnalysisPayload(BaseModel):
    """Wire schema of the analyzer's answer. Every field is optional."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uncovered_requirements: list[str] | None = Field(default=None, alias="uncoveredRequirements")
    partially_covered: list[PartiallyCoveredPayload] | None = Field(
        default=None, alias="partiallyCovered"
    )
    critical_gaps: list[str] | None = Field(default=None, alias="criticalGaps")
    suggestions: list[str] | None = None

    def to_response(self) -> GapAnalysisResponse:
        return GapAnalysisResponse(
            uncovered_requirements=self.uncovered_requirements or [],
            partially_covered=[
                PartiallyCoveredItem(requirement=p.requirement, reason=p.reason)
                for p in self.partially_covered or []
            ],
            critical_gaps=self.critical_gaps or [],
            suggestions=self.suggestions or [],
        )


class EvidenceAnalyzerClient:
    """Calls the gap analysis service once per request, without retries.

    ``analyze_gaps`` never raises: every failure is returned as a failed
    AnalysisOutcome so callers can branch on it.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def analyze_gaps(self, request: GapAnalysisRequest) -> AnalysisOutcome:
        """Ask the analyzer for critical gaps and suggestions.

        Args:
            request: Summary of the checklist's requirements and evidence.

        Returns:
            RECEIVED with the parsed response, EMPTY when the service answered
            without a body, or FAILED with the error message.
        """
        logger.info(
            "Calling evidence analyzer with %d requirements", len(request.requirements)
        )
        try:
            payload = await self._post(request.to_dict())
            if payload is None:
                return AnalysisOutcome.empty()
            response = _parse_payload(payload)
        except CollaboratorUnavailableError as e:
            return self._failed(str(e))
        except Exception as e:
            logger.exception("Unexpected error calling evidence analyzer")
            return self._failed(f"Unexpected error: {e}")

        logger.info("Received %d suggestions from evidence analyzer", len(response.suggestions))
        return AnalysisOutcome.received(response)

    async def _post(self, body: dict[str, Any]) -> Any:
        url = f"{self.base_url}{GAPS_PATH}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, json=body, timeout=self.timeout)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CollaboratorUnavailableError(
                f"HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise CollaboratorUnavailableError(f"Evidence analyzer error: {e}") from e

        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            raise CollaboratorUnavailableError(f"Malformed analyzer response: {e}") from e

    def _failed(self, error: str) -> AnalysisOutcome:
        logger.warning("Failed to get gap analysis: %s", error)
        log_service_event("collaborator_failed", "evidence_analyzer", error)
        return AnalysisOutcome.failed(error)


def _parse_payload(payload: Any) -> GapAnalysisResponse:
    try:
        return GapAnalysisPayload.model_validate(payload).to_response()
    except ValidationError as e:
        raise CollaboratorUnavailableError(f"Malformed analyzer response: {e}") from e
