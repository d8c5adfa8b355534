from pydantic import BaseModel, Field, ConfigDict, model_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional, List

from carux.models.enumerations import ReviewStatus


class ReviewCreate(BaseModel):
    """
    Model for creating a new review.

    The taxonomy version is never supplied by the caller; the review is
    bound to whichever version is active at creation time.
    """

    model_config = ConfigDict(extra="forbid")

    car_id: UUID = Field(..., description="Car under review")
    reviewer_id: UUID = Field(..., description="Assigned reviewer")
    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def validate_date_range(self):
        """Ensure end_date >= start_date."""
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self


class Review(BaseModel):
    """Stored review record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    car_id: UUID
    reviewer_id: UUID
    status: ReviewStatus = ReviewStatus.PENDING
    is_published: bool = False
    taxonomy_version_id: UUID
    start_date: datetime
    end_date: datetime
    last_modified_by_id: Optional[UUID] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ReviewUpdate(BaseModel):
    """
    Partial update of the two lifecycle axes.

    Unset fields are left alone.
    """

    model_config = ConfigDict(extra="forbid")

    status: Optional[ReviewStatus] = None
    is_published: Optional[bool] = None


class CompletionStatus(BaseModel):
    review_id: UUID
    completed_tasks: int
    total_tasks: int
    completed_categories: int
    total_categories: int
    fraction: float = Field(..., ge=0, le=1)


class ReviewList(BaseModel):
    items: List[Review]
    total: int
