from pydantic import BaseModel, Field, ConfigDict
from uuid import UUID
from datetime import datetime, timezone
from typing import Optional, List

# Every rated criterion uses the same 1-4 scale
RatingField = Field(default=None, ge=1, le=4)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskEvaluationInput(BaseModel):
    """
    Reviewer's answers for one task.

    Writing this payload replaces any previous evaluation of the same
    (review, task) pair in full; omitted fields are stored as unset.
    """

    model_config = ConfigDict(extra="forbid")

    doable: Optional[bool] = None
    undoable_reason: Optional[str] = None
    usability_score: Optional[int] = RatingField
    usability_feedback: Optional[str] = None
    visuals_score: Optional[int] = RatingField
    visuals_feedback: Optional[str] = None
    media: List[str] = Field(default_factory=list, description="Opaque media references")


class TaskEvaluation(TaskEvaluationInput):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    review_id: UUID
    task_id: UUID
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class CategoryEvaluationInput(BaseModel):
    """Reviewer's category-wide ratings; emotional is scored as a bonus."""

    model_config = ConfigDict(extra="forbid")

    responsiveness_score: Optional[int] = RatingField
    responsiveness_feedback: Optional[str] = None
    writing_score: Optional[int] = RatingField
    writing_feedback: Optional[str] = None
    emotional_score: Optional[int] = RatingField
    emotional_feedback: Optional[str] = None
    media: List[str] = Field(default_factory=list, description="Opaque media references")


class CategoryEvaluation(CategoryEvaluationInput):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    review_id: UUID
    category_id: UUID
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
