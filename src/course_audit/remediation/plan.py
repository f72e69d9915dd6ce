"""Turn an integrity report into concrete remediation actions."""

from __future__ import annotations

from course_audit.models.remediation import (
    ActionType,
    RemediationAction,
    RemediationPlan,
)
from course_audit.models.reports import CourseStatus, IntegrityReport


def build_remediation_plan(report: IntegrityReport) -> RemediationPlan:
    """Derive rename, archive and review actions from a finished report.

    - ``WRONG_TITLE`` → rename to the matched source title.
    - ``DUPLICATE`` (non-keepers) and ``ORPHAN`` → archive.
    - ``MIXED`` → manual review.

    ``CORRECT`` courses need nothing.
    """
    plan = RemediationPlan()
    keeper_of = {
        course_id: group.keeper_id
        for group in report.duplicates
        for course_id in group.delete_ids
    }

    for course in report.courses:
        match course.status:
            case CourseStatus.WRONG_TITLE:
                plan.renames.append(
                    RemediationAction(
                        action=ActionType.RENAME,
                        course_id=course.destination_id,
                        title=course.destination_title,
                        new_title=course.correct_title,
                        reason=f"videos match source course '{course.correct_title}'",
                    )
                )
            case CourseStatus.DUPLICATE:
                keeper = keeper_of.get(course.destination_id)
                plan.archives.append(
                    RemediationAction(
                        action=ActionType.ARCHIVE,
                        course_id=course.destination_id,
                        title=course.destination_title,
                        reason=(
                            f"Duplicate of {keeper}"
                            if keeper is not None
                            else "Duplicate"
                        ),
                    )
                )
            case CourseStatus.ORPHAN:
                plan.archives.append(
                    RemediationAction(
                        action=ActionType.ARCHIVE,
                        course_id=course.destination_id,
                        title=course.destination_title,
                        reason=course.recommendation or "Orphan",
                    )
                )
            case CourseStatus.MIXED:
                plan.reviews.append(
                    RemediationAction(
                        action=ActionType.REVIEW,
                        course_id=course.destination_id,
                        title=course.destination_title,
                        reason=course.recommendation or "videos from multiple courses",
                    )
                )
            case _:
                pass

    return plan


def format_plan(plan: RemediationPlan) -> str:
    """Render the plan as indented text sections."""
    if plan.is_empty:
        return "Nothing to do: every course is correct."

    lines: list[str] = []
    for label, actions in [
        ("RENAME", plan.renames),
        ("ARCHIVE", plan.archives),
        ("REVIEW", plan.reviews),
    ]:
        if not actions:
            continue
        lines.append(f"=== {label} ({len(actions)}) ===")
        for action in actions:
            if action.new_title is not None:
                lines.append(
                    f'  {action.course_id}: "{action.title}" -> "{action.new_title}"'
                )
            else:
                lines.append(
                    f'  {action.course_id}: "{action.title}" ({action.reason})'
                )
        lines.append("")
    return "\n".join(lines).rstrip()
