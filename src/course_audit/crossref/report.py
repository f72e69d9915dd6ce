"""Integrity report assembly, persistence and console rendering."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from pathlib import Path

import structlog

from course_audit.crossref.voting import NO_MATCH_RECOMMENDATION
from course_audit.errors import ReportWriteError
from course_audit.models.catalog import FailedFetch
from course_audit.models.reports import (
    CourseReport,
    CourseStatus,
    DuplicateGroup,
    IntegrityReport,
    OrphanSummary,
    ReportSummary,
)

logger = structlog.get_logger()

STATUS_ICONS: dict[CourseStatus, str] = {
    CourseStatus.CORRECT: "[OK]",
    CourseStatus.WRONG_TITLE: "[!!]",
    CourseStatus.DUPLICATE: "[DUP]",
    CourseStatus.ORPHAN: "[---]",
    CourseStatus.MIXED: "[MIX]",
}

RULE_WIDTH = 65


def assemble_report(
    *,
    reports: Sequence[CourseReport],
    duplicates: Sequence[DuplicateGroup],
    total_source_courses: int,
    failed_fetches: Sequence[FailedFetch] = (),
) -> IntegrityReport:
    """Aggregate final course reports into one integrity report.

    Counting and filtering only. *reports* must already have the
    duplicate pass applied.
    """
    counts = Counter(report.status for report in reports)
    summary = ReportSummary(
        total_source_courses=total_source_courses,
        total_destination_courses=len(reports),
        correct=counts[CourseStatus.CORRECT],
        wrong_title=counts[CourseStatus.WRONG_TITLE],
        duplicate=counts[CourseStatus.DUPLICATE],
        orphan=counts[CourseStatus.ORPHAN],
        mixed=counts[CourseStatus.MIXED],
        failed_fetches=len(failed_fetches),
    )
    orphans = [
        OrphanSummary(
            destination_id=report.destination_id,
            destination_title=report.destination_title,
            recommendation=report.recommendation or NO_MATCH_RECOMMENDATION,
        )
        for report in reports
        if report.status == CourseStatus.ORPHAN
    ]
    return IntegrityReport(
        summary=summary,
        courses=list(reports),
        duplicates=list(duplicates),
        orphans=orphans,
        failed_fetches=list(failed_fetches),
    )


def write_report(report: IntegrityReport, path: Path) -> Path:
    """Write the report as indented camelCase JSON, creating parent dirs.

    Raises:
        ReportWriteError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report.to_json(), encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(f"Cannot write report to {path}: {exc}") from exc

    logger.info("integrity_report_written", path=str(path))
    return path


def read_report(path: Path) -> IntegrityReport:
    """Load a previously written integrity report."""
    return IntegrityReport.model_validate_json(path.read_text(encoding="utf-8"))


def format_course_line(report: CourseReport) -> str:
    """One progress line per classified course."""
    icon = STATUS_ICONS[report.status]
    matched = report.matched_source_title or "NO MATCH"
    return (
        f'{icon} {report.destination_id}: "{report.destination_title[:35]}" '
        f"-> {matched} ({report.confidence_percent}%)"
    )


def format_summary(report: IntegrityReport) -> str:
    """Render the human-readable run summary."""
    rule = "-" * RULE_WIDTH
    banner = "=" * RULE_WIDTH
    s = report.summary
    lines: list[str] = [
        banner,
        "SUMMARY".center(RULE_WIDTH).rstrip(),
        banner,
        "",
        f"Source Courses:       {s.total_source_courses}",
        f"Destination Courses:  {s.total_destination_courses}",
        "",
        f"[OK]  Correct:        {s.correct}",
        f"[!!]  Wrong Title:    {s.wrong_title}",
        f"[DUP] Duplicate:      {s.duplicate}",
        f"[---] Orphan:         {s.orphan}",
        f"[MIX] Mixed:          {s.mixed}",
        f"Failed fetches:       {s.failed_fetches}",
        "",
    ]

    renames = [c for c in report.courses if c.status == CourseStatus.WRONG_TITLE]
    if renames:
        lines += [rule, "COURSES NEEDING TITLE UPDATE:", rule]
        lines += [
            f'  {c.destination_id}: "{c.destination_title}" -> "{c.correct_title}"'
            for c in renames
        ]
        lines.append("")

    if report.duplicates:
        lines += [rule, "DUPLICATE COURSES:", rule]
        for group in report.duplicates:
            ids = ", ".join(str(i) for i in group.destination_ids)
            lines.append(f'  "{group.source_title}": destination IDs {ids}')
            lines.append(f"    -> {group.recommendation}")
        lines.append("")

    if report.orphans:
        lines += [rule, "ORPHAN COURSES (no source match):", rule]
        lines += [
            f'  {o.destination_id}: "{o.destination_title}"' for o in report.orphans
        ]
        lines.append("")

    if report.failed_fetches:
        lines += [rule, "FAILED SOURCE PAGES:", rule]
        lines += [
            f'  "{f.title}" ({f.url}): {f.error}' for f in report.failed_fetches
        ]
        lines.append("")

    lines.append(banner)
    return "\n".join(lines)
