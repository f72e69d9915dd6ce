"""Cross-referencing: voting, duplicate detection, report assembly."""

from course_audit.crossref.duplicates import find_duplicates, mark_duplicates
from course_audit.crossref.report import (
    assemble_report,
    format_summary,
    read_report,
    write_report,
)
from course_audit.crossref.voting import (
    build_video_index,
    cross_reference,
    cross_reference_course,
)

__all__ = [
    "assemble_report",
    "build_video_index",
    "cross_reference",
    "cross_reference_course",
    "find_duplicates",
    "format_summary",
    "mark_duplicates",
    "read_report",
    "write_report",
]
