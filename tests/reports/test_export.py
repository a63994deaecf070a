"""Report export tests."""

import json

from complytrack.models import (
    CategorySummary,
    ComplianceReport,
    Gap,
    GapReport,
    OverallStatus,
    Status,
)
from complytrack.reports import (
    export_report_json,
    format_compliance_report_markdown,
    format_gap_report_markdown,
)


def _compliance_report() -> ComplianceReport:
    return ComplianceReport(
        checklist_id="iso-27001-simplified",
        checklist_name="ISO 27001 Essential Controls",
        generated_at="2024-05-01T10:00:00+00:00",
        overall_status=OverallStatus(
            total_items=3,
            completed_items=1,
            partial_items=1,
            pending_items=1,
            completion_percentage=33.33,
        ),
        category_summaries={
            "Access Control": CategorySummary("Access Control", total=3, completed=1, percentage=33.33),
        },
        completed_requirements=["AC-1: Password policy documented and enforced"],
        partial_requirements=["AC-2: User access reviews conducted quarterly"],
        pending_requirements=["AC-3: Administrative access logged and monitored"],
    )


class TestComplianceMarkdown:
    """Tests for format_compliance_report_markdown."""

    def test_contains_summary_and_sections(self):
        markdown = format_compliance_report_markdown(_compliance_report())

        assert markdown.startswith("# Compliance Report: ISO 27001 Essential Controls")
        assert "- **Completion**: 33.33%" in markdown
        assert "| Access Control | 1 | 3 | 33.33 |" in markdown
        assert "## ✅ Completed Requirements" in markdown
        assert "- AC-3: Administrative access logged and monitored" in markdown

    def test_empty_sections_omitted(self):
        report = _compliance_report()
        report.partial_requirements = []

        markdown = format_compliance_report_markdown(report)

        assert "Partially Covered Requirements" not in markdown


class TestGapMarkdown:
    """Tests for format_gap_report_markdown."""

    def test_gaps_and_recommendations(self):
        report = GapReport(
            checklist_id="iso-27001-simplified",
            generated_at="2024-05-01T10:00:00+00:00",
            gaps=[
                Gap("AC-3", "Administrative access logged and monitored", "Access Control",
                    Status.PENDING, "No evidence provided"),
            ],
            critical_gaps=["AC-3: Administrative access logged and monitored"],
            recommendations=["Upload evidence documents for pending requirements"],
        )

        markdown = format_gap_report_markdown(report)

        assert "## Critical Gaps" in markdown
        assert "### ❌ AC-3: Administrative access logged and monitored" in markdown
        assert "- **Reason**: No evidence provided" in markdown
        assert "- Upload evidence documents for pending requirements" in markdown

    def test_no_gaps(self):
        report = GapReport(checklist_id="done", generated_at="2024-05-01T10:00:00+00:00")
        markdown = format_gap_report_markdown(report)
        assert "All requirements are completed." in markdown
        assert "## Recommendations" not in markdown


class TestJsonExport:
    """Tests for export_report_json."""

    def test_writes_wire_form(self, tmp_path):
        path = export_report_json(_compliance_report(), tmp_path / "out" / "report.json")

        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["checklistName"] == "ISO 27001 Essential Controls"
        assert data["overallStatus"]["completionPercentage"] == 33.33
        assert data["pendingRequirements"] == ["AC-3: Administrative access logged and monitored"]
