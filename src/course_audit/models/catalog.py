"""Catalog schemas for both sides of the cross-reference."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field, computed_field

from course_audit.video_id import extract_video_id


class SourceCourse(BaseModel):
    """A course scraped from the source CMS.

    ``title`` is the normalized catalog title, which is also the key
    of the source catalog mapping. ``video_ids`` keeps first-appearance
    order without duplicates.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    canonical_url: str
    video_ids: tuple[str, ...] = ()


class FailedFetch(BaseModel):
    """A source course page that could not be fetched."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    error: str


class SourceCatalog(BaseModel):
    """Result of a full source scrape: parsed courses plus fetch failures."""

    courses: dict[str, SourceCourse] = Field(default_factory=dict)
    failed: list[FailedFetch] = Field(default_factory=list)


class Lesson(BaseModel):
    """Destination lesson. ``video_id`` is derived from ``video_url``."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID | str
    title: str
    video_url: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def video_id(self) -> str | None:
        if not self.video_url:
            return None
        return extract_video_id(self.video_url)


class Module(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID | str
    title: str
    lessons: tuple[Lesson, ...] = ()


class DestinationCourse(BaseModel):
    """A course loaded from the destination database.

    Modules and lessons are already sorted by their ``order`` column.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    modules: tuple[Module, ...] = ()

    @property
    def video_ids(self) -> list[str]:
        """Distinct video IDs of the course in module/lesson order.

        A video reused by two lessons counts once, in the vote tally
        and in the total alike.
        """
        video_ids = (
            lesson.video_id
            for module in self.modules
            for lesson in module.lessons
            if lesson.video_id is not None
        )
        return list(dict.fromkeys(video_ids))

    @property
    def module_count(self) -> int:
        return len(self.modules)

    @property
    def lesson_count(self) -> int:
        return sum(len(module.lessons) for module in self.modules)


VideoIndex = dict[str, list[str]]
"""Video ID → normalized titles of the source courses containing it."""
