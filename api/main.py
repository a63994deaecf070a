"""FastAPI server for complytrack checklists and reports."""

from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from complytrack.errors import ChecklistServiceError, InvalidInputError, NotFoundError
from complytrack.reports import format_compliance_report_markdown
from complytrack.runner import ComplyTrackRunner
from complytrack.tracing.logger import get_tracer
from config.settings import settings

from api.schemas import ExportFormatEnum, StatusUpdateRequest, SuggestionRequest

app = FastAPI(
    title="complytrack API",
    description="Compliance checklist tracking with evidence-based status and gap reports",
    version="0.1.0",
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global state
runner: ComplyTrackRunner | None = None


def get_runner() -> ComplyTrackRunner:
    """Get or create the global runner instance."""
    global runner
    if runner is None:
        runner = ComplyTrackRunner()
    return runner


# ============ Health Check ============

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "complytrack"}


# ============ Checklists ============
# Plain def handlers run in the threadpool, so concurrent updates really
# contend on the per-checklist locks.

@app.get("/api/checklists")
def list_checklists() -> list[dict[str, Any]]:
    """List all checklists."""
    return [c.to_dict() for c in get_runner().checklists.list_checklists()]


@app.get("/api/checklists/{checklist_id}")
def get_checklist(checklist_id: str):
    """Get a checklist with its items and evidence."""
    try:
        checklist = get_runner().checklists.get_checklist(checklist_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Checklist not found")
    return checklist.to_dict()


@app.post("/api/checklists/{checklist_id}/items/{item_id}/status")
def update_item_status(checklist_id: str, item_id: str, request: StatusUpdateRequest):
    """Attach evidence to an item; its status is recomputed server-side."""
    evidence = request.evidence.to_evidence() if request.evidence else None
    try:
        item = get_runner().checklists.update_item_status(
            checklist_id,
            item_id,
            evidence=evidence,
            status_hint=request.status_hint,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return item.to_dict()


@app.get("/api/checklists/{checklist_id}/progress")
def get_progress(checklist_id: str):
    """Get completion counts for a checklist."""
    try:
        progress = get_runner().checklists.get_progress(checklist_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Checklist not found")
    return progress.to_dict()


# ============ Reports ============

@app.get("/api/report/compliance/{checklist_id}")
async def get_compliance_report(checklist_id: str):
    """Generate a compliance report."""
    try:
        report = await get_runner().reports.generate_compliance_report(checklist_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Checklist not found")
    except ChecklistServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return report.to_dict()


@app.get("/api/report/compliance/{checklist_id}/export")
async def export_compliance_report(
    checklist_id: str,
    format: ExportFormatEnum = ExportFormatEnum.MARKDOWN,
):
    """Export a compliance report as Markdown or JSON."""
    try:
        report = await get_runner().reports.generate_compliance_report(checklist_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Checklist not found")
    except ChecklistServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if format == ExportFormatEnum.JSON:
        return report.to_dict()
    return PlainTextResponse(
        format_compliance_report_markdown(report),
        media_type="text/markdown",
    )


@app.get("/api/report/gaps/{checklist_id}")
async def get_gap_report(checklist_id: str):
    """Generate a gap report. Succeeds even when the gap analyzer is down."""
    try:
        report = await get_runner().reports.generate_gap_report(checklist_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Checklist not found")
    except ChecklistServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return report.to_dict()


@app.post("/api/report/suggestions")
async def get_suggestions(request: SuggestionRequest):
    """Generate rule-based suggestions for free-text gaps."""
    return get_runner().reports.generate_suggestions(request.gaps).to_dict()


# ============ Trace ============

@app.get("/trace")
async def get_trace():
    """Get the event trace from the current session."""
    return {"events": get_tracer().get_events()}


@app.delete("/trace")
async def clear_trace():
    """Clear the event trace."""
    get_tracer().clear()
    return {"status": "cleared"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
