"""Markdown and JSON renderings of compliance and gap reports."""

import json
from pathlib import Path
from typing import Any

from complytrack.models import ComplianceReport, GapReport

STATUS_EMOJI = {
    "COMPLETED": "✅",
    "PARTIAL": "⚠️",
    "PENDING": "❌",
}


def format_compliance_report_markdown(report: ComplianceReport) -> str:
    """Format a compliance report as Markdown.

    Args:
        report: The compliance report.

    Returns:
        Markdown formatted report string.
    """
    overall = report.overall_status
    lines = [
        f"# Compliance Report: {report.checklist_name}",
        "",
        f"- **Checklist ID**: {report.checklist_id}",
        f"- **Generated**: {report.generated_at}",
        f"- **Completion**: {overall.completion_percentage:.2f}%",
        "",
        "## Summary",
        "",
        f"- {STATUS_EMOJI['COMPLETED']} **COMPLETED**: {overall.completed_items}",
        f"- {STATUS_EMOJI['PARTIAL']} **PARTIAL**: {overall.partial_items}",
        f"- {STATUS_EMOJI['PENDING']} **PENDING**: {overall.pending_items}",
        f"- **Total**: {overall.total_items}",
        "",
        "## Categories",
        "",
        "| Category | Completed | Total | % |",
        "|----------|-----------|-------|---|",
    ]
    for summary in report.category_summaries.values():
        lines.append(
            f"| {summary.category} | {summary.completed} | {summary.total} | {summary.percentage:.2f} |"
        )

    sections = (
        ("COMPLETED", "Completed Requirements", report.completed_requirements),
        ("PARTIAL", "Partially Covered Requirements", report.partial_requirements),
        ("PENDING", "Pending Requirements", report.pending_requirements),
    )
    for status, title, requirements in sections:
        if not requirements:
            continue
        lines.extend(["", f"## {STATUS_EMOJI[status]} {title}", ""])
        lines.extend(f"- {req}" for req in requirements)

    lines.append("")
    return "\n".join(lines)


def format_gap_report_markdown(report: GapReport) -> str:
    """Format a gap report as Markdown."""
    lines = [
        f"# Gap Report: {report.checklist_id}",
        "",
        f"- **Generated**: {report.generated_at}",
        f"- **Open items**: {len(report.gaps)}",
        f"- **Critical gaps**: {len(report.critical_gaps)}",
    ]
    if not report.gaps:
        lines.extend(["", "All requirements are completed.", ""])
        return "\n".join(lines)

    if report.critical_gaps:
        lines.extend(["", "## Critical Gaps", ""])
        lines.extend(f"- {gap}" for gap in report.critical_gaps)

    lines.extend(["", "## Gaps", ""])
    for gap in report.gaps:
        emoji = STATUS_EMOJI.get(gap.status.value, "❓")
        lines.append(f"### {emoji} {gap.requirement_id}: {gap.requirement}")
        lines.append(f"- **Category**: {gap.category}")
        lines.append(f"- **Status**: {gap.status.value}")
        lines.append(f"- **Reason**: {gap.reason}")
        lines.append("")

    lines.extend(["## Recommendations", ""])
    lines.extend(f"- {rec}" for rec in report.recommendations)
    lines.append("")
    return "\n".join(lines)


def export_report_json(report: ComplianceReport | GapReport, output_path: str | Path) -> Path:
    """Write a report's wire form to a JSON file.

    Returns:
        Path to the written file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload: dict[str, Any] = report.to_dict()
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return path
