"""Archive duplicate and orphan courses found by the integrity check.

Reads a saved integrity report, prints the remediation plan and, with
``--execute``, archives the listed courses through the platform's
course-import API.

Usage:
    uv run python scripts/archive_courses.py              # dry run
    uv run python scripts/archive_courses.py --execute
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import httpx

from course_audit.config import Settings, get_settings
from course_audit.crossref.report import read_report
from course_audit.errors import ArchiveConfigError
from course_audit.logging_config import configure_logging
from course_audit.models.remediation import ArchiveResult, RemediationAction
from course_audit.remediation.archive import (
    ArchiveClient,
    archive_courses,
    write_archive_results,
)
from course_audit.remediation.plan import build_remediation_plan, format_plan

ARCHIVE_RESULTS_FILENAME = "archive-results.json"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Archive duplicate/orphan courses")
    parser.add_argument(
        "--report-path",
        type=Path,
        default=None,
        help="Integrity report to read (default: REPORT_PATH setting)",
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Actually call the archive API (default is a dry run)",
    )
    return parser.parse_args(argv)


def format_results(results: list[ArchiveResult]) -> str:
    """Summarize archive results and list failures."""
    archived = sum(1 for r in results if r.success)
    failed = [r for r in results if not r.success]
    lines = [f"  Archived: {archived}", f"  Failed:   {len(failed)}"]
    if failed:
        lines.append("")
        lines.append("  Failed courses:")
        lines += [f"    - {r.course_id}: {r.title} ({r.error})" for r in failed]
    return "\n".join(lines)


async def execute_archive(
    settings: Settings,
    actions: list[RemediationAction],
) -> list[ArchiveResult]:
    async with httpx.AsyncClient(timeout=settings.fetch_timeout_seconds) as http:
        client = ArchiveClient.from_settings(http, settings)
        return await archive_courses(
            client,
            actions,
            delay_seconds=settings.archive_delay_seconds,
        )


def main() -> None:
    """Run the archive CLI."""
    args = parse_args()
    settings = get_settings()
    configure_logging(
        environment=str(settings.environment),
        log_level=settings.log_level,
    )

    report_path = args.report_path or settings.report_path
    if not report_path.exists():
        print(f"Report not found: {report_path}", file=sys.stderr)
        sys.exit(1)

    plan = build_remediation_plan(read_report(report_path))
    print(format_plan(plan))

    if not args.execute or not plan.archives:
        return

    try:
        results = asyncio.run(execute_archive(settings, plan.archives))
    except ArchiveConfigError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)

    print()
    print(format_results(results))
    path = write_archive_results(
        results, report_path.with_name(ARCHIVE_RESULTS_FILENAME)
    )
    print(f"\nResults saved to: {path}")


if __name__ == "__main__":
    main()
