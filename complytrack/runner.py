"""Main runner for complytrack: service wiring and CLI."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from dotenv import load_dotenv

from complytrack.catalog import seed_store
from complytrack.clients import (
    ChecklistReader,
    ChecklistServiceClient,
    EvidenceAnalyzerClient,
    LocalChecklistReader,
)
from complytrack.errors import ComplyTrackError
from complytrack.persistence import EvidenceStore, get_evidence_store
from complytrack.reports import (
    ReportEngine,
    export_report_json,
    format_compliance_report_markdown,
    format_gap_report_markdown,
)
from complytrack.reports.engine import GapAnalyzer
from complytrack.services import ChecklistService
from complytrack.tracing.logger import log_service_event, setup_tracing
from config.settings import settings

load_dotenv()


class ComplyTrackRunner:
    """Wires the store, checklist service and report engine together."""

    def __init__(
        self,
        store: EvidenceStore | None = None,
        reader: ChecklistReader | None = None,
        analyzer: GapAnalyzer | None = None,
        tracing_enabled: bool | None = None,
    ):
        """Initialize the runner.

        Args:
            store: Evidence store; defaults to the process-wide store.
            reader: Checklist reader for reports; defaults to the remote
                checklist service when CHECKLIST_SERVICE_URL is set, else
                the in-process service.
            analyzer: Gap analyzer; defaults to the HTTP evidence analyzer.
            tracing_enabled: Overrides settings.tracing_enabled.
        """
        if settings.tracing_enabled if tracing_enabled is None else tracing_enabled:
            setup_tracing(settings.log_level, settings.trace_max_events)

        self.store = store if store is not None else get_evidence_store()
        seeded = seed_store(self.store, settings.seed_catalog_path or None)
        self.checklists = ChecklistService(self.store)

        if reader is None:
            if settings.checklist_service_url:
                reader = ChecklistServiceClient(
                    settings.checklist_service_url,
                    timeout=settings.checklist_timeout_seconds,
                )
            else:
                reader = LocalChecklistReader(self.checklists)
        if analyzer is None:
            analyzer = EvidenceAnalyzerClient(
                settings.evidence_analyzer_url,
                timeout=settings.analyzer_timeout_seconds,
            )
        self.reports = ReportEngine(reader, analyzer, settings.critical_categories)

        log_service_event(
            "init",
            "runner",
            "complytrack runner initialized",
            {"seeded": [c.id for c in seeded], "checklists": len(self.store)},
        )


def _print_progress(runner: ComplyTrackRunner, checklist_id: str) -> None:
    progress = runner.checklists.get_progress(checklist_id)
    print(
        f"{progress.checklist_id}: {progress.completion_percentage:.2f}% complete "
        f"({progress.completed_items} completed, {progress.partial_items} partial, "
        f"{progress.pending_items} pending of {progress.total_items})"
    )


async def _print_report(
    runner: ComplyTrackRunner,
    checklist_id: str,
    gaps: bool,
    fmt: str,
    output: str | None,
) -> None:
    if gaps:
        report = await runner.reports.generate_gap_report(checklist_id)
        markdown = format_gap_report_markdown(report)
    else:
        report = await runner.reports.generate_compliance_report(checklist_id)
        markdown = format_compliance_report_markdown(report)

    if output and fmt == "json":
        path = export_report_json(report, output)
        print(f"Report written to {path}")
    elif output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")
        print(f"Report written to {path}")
    elif fmt == "json":
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(markdown)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="complytrack compliance checklist tracker")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List checklists")

    progress = sub.add_parser("progress", help="Show checklist progress")
    progress.add_argument("checklist_id")

    report = sub.add_parser("report", help="Render a compliance or gap report")
    report.add_argument("checklist_id")
    report.add_argument("--gaps", action="store_true", help="Render the gap report")
    report.add_argument("--format", choices=["markdown", "json"], default="markdown")
    report.add_argument("--output", help="Write the report to this path in the chosen format")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8080)

    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("api.main:app", host=args.host, port=args.port)
        return

    runner = ComplyTrackRunner()
    try:
        if args.command == "list":
            for checklist in runner.checklists.list_checklists():
                print(f"{checklist.id}\t{checklist.name}\t{len(checklist.items)} items")
        elif args.command == "progress":
            _print_progress(runner, args.checklist_id)
        else:
            asyncio.run(
                _print_report(runner, args.checklist_id, args.gaps, args.format, args.output)
            )
    except ComplyTrackError as e:
        print(f"Error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
