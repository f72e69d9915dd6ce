"""Remediation plan and archive result schemas."""

from enum import StrEnum

from pydantic import BaseModel, Field


class ActionType(StrEnum):
    RENAME = "rename"
    ARCHIVE = "archive"
    REVIEW = "review"


class RemediationAction(BaseModel):
    """One suggested fix for a destination course."""

    action: ActionType
    course_id: int
    title: str
    reason: str
    new_title: str | None = None


class RemediationPlan(BaseModel):
    """Actions derived from an integrity report, grouped by type."""

    renames: list[RemediationAction] = Field(default_factory=list)
    archives: list[RemediationAction] = Field(default_factory=list)
    reviews: list[RemediationAction] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.renames or self.archives or self.reviews)


class ArchiveResult(BaseModel):
    """Outcome of a single archive call to the platform import API."""

    course_id: int
    title: str
    success: bool
    error: str | None = None
