"""Report aggregation engine: compliance reports, gap reports, suggestions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Protocol

from complytrack.clients.checklist_client import ChecklistReader
from complytrack.models import (
    AnalysisOutcome,
    AnalysisOutcomeKind,
    CategorySummary,
    Checklist,
    ComplianceReport,
    Gap,
    GapAnalysisRequest,
    GapReport,
    OverallStatus,
    ProgressSummary,
    Status,
    Suggestion,
    SuggestionResponse,
    completion_percentage,
)
from complytrack.tracing.logger import log_service_event

logger = logging.getLogger(__name__)

DEFAULT_CRITICAL_CATEGORIES = ("Access Control", "Data Protection", "Risk Management")

FALLBACK_RECOMMENDATIONS = (
    "Upload evidence documents for pending requirements",
    "Review and complete partially covered requirements",
)

SUGGESTION_ACTION_ITEMS = (
    "Create or locate the required documentation",
    "Upload the document for AI analysis",
    "Review and address any gaps identified by the AI",
)

HIGH_PRIORITY_TERMS = ("password", "access")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class GapAnalyzer(Protocol):
    async def analyze_gaps(self, request: GapAnalysisRequest) -> AnalysisOutcome:
        ...


class ReportEngine:
    """Builds reports from checklist snapshots.

    Reports are point-in-time views: each one reads a fresh snapshot and no
    synchronization happens between concurrent report requests.
    """

    def __init__(
        self,
        reader: ChecklistReader,
        analyzer: GapAnalyzer,
        critical_categories: Iterable[str] = DEFAULT_CRITICAL_CATEGORIES,
    ):
        self.reader = reader
        self.analyzer = analyzer
        self.critical_categories = frozenset(critical_categories)

    async def generate_compliance_report(self, checklist_id: str) -> ComplianceReport:
        """Summarize a checklist's completion overall and per category.

        Raises:
            ChecklistNotFoundError: If the checklist does not exist.
        """
        checklist = await self.reader.fetch_checklist(checklist_id)
        items = checklist.items

        return ComplianceReport(
            checklist_id=checklist_id,
            checklist_name=checklist.name,
            generated_at=_utc_now(),
            overall_status=OverallStatus.from_progress(
                ProgressSummary.from_items(checklist_id, items)
            ),
            category_summaries=self._summarize_categories(checklist),
            completed_requirements=[i.label for i in checklist.get_items_by_status(Status.COMPLETED)],
            partial_requirements=[i.label for i in checklist.get_items_by_status(Status.PARTIAL)],
            pending_requirements=[i.label for i in checklist.get_items_by_status(Status.PENDING)],
        )

    def _summarize_categories(self, checklist: Checklist) -> dict[str, CategorySummary]:
        summaries = {name: CategorySummary(category=name) for name in checklist.categories}
        for item in checklist.items:
            summary = summaries[item.category]
            summary.total += 1
            if item.status == Status.COMPLETED:
                summary.completed += 1
        for summary in summaries.values():
            summary.percentage = completion_percentage(summary.completed, summary.total)
        return summaries

    async def generate_gap_report(self, checklist_id: str) -> GapReport:
        """List a checklist's open items with critical gaps and recommendations.

        The gap analysis service is consulted only when there are gaps. Its
        failure never fails the report: recommendations fall back to fixed
        strings and critical gaps come from the local category rule.

        Raises:
            ChecklistNotFoundError: If the checklist does not exist.
        """
        checklist = await self.reader.fetch_checklist(checklist_id)
        gaps = [Gap.from_item(item) for item in checklist.items if item.status != Status.COMPLETED]

        report = GapReport(checklist_id=checklist_id, generated_at=_utc_now(), gaps=gaps)
        if not gaps:
            return report

        outcome = await self._analyze(checklist)

        if outcome.kind == AnalysisOutcomeKind.RECEIVED:
            seed = list(outcome.critical_gaps)
            if outcome.suggestions:
                report.recommendations = list(outcome.suggestions)
                report.analysis_source = "collaborator"
            else:
                report.recommendations = list(FALLBACK_RECOMMENDATIONS)
                report.analysis_source = "fallback"
        else:
            # EMPTY or FAILED: nothing usable came back
            seed = []
            report.recommendations = list(FALLBACK_RECOMMENDATIONS)
            report.analysis_source = "fallback"
            log_service_event(
                "fallback",
                "report_engine",
                f"Generic recommendations for {checklist_id}",
                {"outcome": outcome.kind.value, "error": outcome.error},
            )

        report.critical_gaps = self._merge_critical_gaps(seed, gaps)
        logger.info(
            "Gap report for %s: %d gaps, %d critical, recommendations from %s",
            checklist_id,
            len(gaps),
            len(report.critical_gaps),
            report.analysis_source,
        )
        return report

    async def _analyze(self, checklist: Checklist) -> AnalysisOutcome:
        """Call the analyzer; an analyzer that raises counts as a failed call."""
        try:
            return await self.analyzer.analyze_gaps(GapAnalysisRequest.from_checklist(checklist))
        except Exception as e:
            logger.exception("Gap analyzer raised for %s", checklist.id)
            return AnalysisOutcome.failed(f"Analyzer error: {e}")

    def _merge_critical_gaps(self, seed: list[str], gaps: list[Gap]) -> list[str]:
        """Append PENDING gaps in critical categories to the seed, without duplicates."""
        critical = list(seed)
        for gap in gaps:
            if gap.status != Status.PENDING or gap.category not in self.critical_categories:
                continue
            if gap.label not in critical:
                critical.append(gap.label)
        return critical

    def generate_suggestions(self, gaps: list[str]) -> SuggestionResponse:
        """Build rule-based suggestions for free-text gaps. Never calls out."""
        suggestions = [
            Suggestion(
                gap=gap,
                recommendation=f"Prepare documentation addressing: {gap}",
                priority="HIGH" if any(term in gap for term in HIGH_PRIORITY_TERMS) else "MEDIUM",
                action_items=list(SUGGESTION_ACTION_ITEMS),
            )
            for gap in gaps
        ]
        return SuggestionResponse(suggestions=suggestions, generated_at=_utc_now())
