"""Course cross-reference integrity check CLI.

Compares the source CMS catalog with the destination database by
YouTube video IDs and writes an integrity report.

Usage:
    uv run python scripts/cross_reference_courses.py
    uv run python scripts/cross_reference_courses.py --min-course-id 600
    uv run python scripts/cross_reference_courses.py --json
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from course_audit.config import Settings, get_settings
from course_audit.crossref.report import format_summary, write_report
from course_audit.integrity_check import IntegrityCheck
from course_audit.logging_config import configure_logging
from course_audit.models.reports import IntegrityReport
from course_audit.source.fetcher import create_http_client
from course_audit.storage.database import create_engine, create_session_factory

RULE = "=" * 65


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Course cross-reference check")
    parser.add_argument(
        "--report-path",
        type=Path,
        default=None,
        help="Where to write the JSON report (default: REPORT_PATH setting)",
    )
    parser.add_argument(
        "--min-course-id",
        type=int,
        default=None,
        help="Only check destination courses with id >= this value",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print the report as JSON instead of the text summary",
    )
    return parser.parse_args(argv)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with CLI flags applied on top of the environment."""
    overrides: dict[str, object] = {}
    if args.report_path is not None:
        overrides["report_path"] = args.report_path
    if args.min_course_id is not None:
        overrides["min_course_id"] = args.min_course_id
    return settings.model_copy(update=overrides) if overrides else settings


async def run_check(settings: Settings, *, verbose: bool = True) -> IntegrityReport:
    """Run the integrity check with real HTTP and database resources."""
    engine = create_engine(settings)
    try:
        async with create_http_client(settings) as client:
            check = IntegrityCheck(
                settings=settings,
                http_client=client,
                session_factory=create_session_factory(engine),
                on_progress=print if verbose else None,
            )
            return await check.run()
    finally:
        await engine.dispose()


def main() -> None:
    """Run the cross-reference CLI."""
    args = parse_args()
    settings = apply_overrides(get_settings(), args)
    configure_logging(
        environment=str(settings.environment),
        log_level=settings.log_level,
    )

    if not args.json_output:
        print(RULE)
        print("    COURSE CROSS-REFERENCE INTEGRITY CHECK")
        print(RULE)

    report = asyncio.run(run_check(settings, verbose=not args.json_output))
    path = write_report(report, settings.report_path)

    if args.json_output:
        print(report.to_json())
    else:
        print(f"\nReport saved to: {path}\n")
        print(format_summary(report))


if __name__ == "__main__":
    main()
