"""Pydantic schemas for API request bodies."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from complytrack.models import Evidence, Status


# === Enums ===
class StatusEnum(str, Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    COMPLETED = "COMPLETED"


# === Checklist Schemas ===
class EvidencePayload(BaseModel):
    """Schema for evidence attached to a status update."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: str = Field(alias="documentId", min_length=1)
    document_name: str = Field(alias="documentName", min_length=1)
    confidence: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    uploaded_at: datetime | None = Field(default=None, alias="uploadedAt")
    relevant_sections: str | None = Field(default=None, alias="relevantSections")

    def to_evidence(self) -> Evidence:
        return Evidence(
            document_id=self.document_id,
            document_name=self.document_name,
            confidence=self.confidence,
            uploaded_at=self.uploaded_at or datetime.now(timezone.utc),
            relevant_sections=self.relevant_sections or "",
        )


class StatusUpdateRequest(BaseModel):
    """Schema for an item status update.

    ``status`` is advisory: the server always recomputes it from evidence.
    """

    status: StatusEnum | None = None
    evidence: EvidencePayload | None = None

    @property
    def status_hint(self) -> Status | None:
        return Status(self.status.value) if self.status else None


# === Report Schemas ===
class SuggestionRequest(BaseModel):
    """Schema for a suggestions request."""

    gaps: list[str] = Field(default_factory=list)


class ExportFormatEnum(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"
