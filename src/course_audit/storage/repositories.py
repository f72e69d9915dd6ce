"""Read-only repository for the destination course catalog."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from course_audit.errors import DestinationLoadError
from course_audit.models.catalog import DestinationCourse, Lesson, Module
from course_audit.storage import orm


def to_destination_course(course: orm.Course) -> DestinationCourse:
    """Convert a loaded ORM course tree into the domain model.

    Modules and lessons are sorted by ``order`` again here so the result
    does not depend on how the relationships were loaded.
    """
    modules = sorted(course.modules, key=lambda m: m.order)
    return DestinationCourse(
        id=course.id,
        title=course.title,
        modules=tuple(
            Module(
                id=module.id,
                title=module.title,
                lessons=tuple(
                    Lesson(
                        id=lesson.id,
                        title=lesson.title,
                        video_url=lesson.video_url,
                    )
                    for lesson in sorted(module.lessons, key=lambda le: le.order)
                ),
            )
            for module in modules
        ),
    )


class DestinationCourseRepository:
    """Loads destination courses with their module/lesson tree."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_courses(self, *, min_id: int = 0) -> list[DestinationCourse]:
        """Load all courses with ``id >= min_id``, ordered by id.

        Uses selectinload for both nesting levels to avoid the
        cartesian product a joined load would produce.

        Args:
            min_id: Lowest course id taking part in the check.

        Returns:
            Domain courses with modules and lessons in display order.

        Raises:
            DestinationLoadError: If the query fails. The destination
                catalog is required input, so callers should not
                continue with partial data.
        """
        stmt = (
            select(orm.Course)
            .where(orm.Course.id >= min_id)
            .order_by(orm.Course.id)
            .options(
                selectinload(orm.Course.modules).selectinload(orm.Module.lessons),
            )
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise DestinationLoadError(f"Failed to fetch courses: {exc}") from exc

        return [to_destination_course(course) for course in result.scalars().all()]
