from pydantic import BaseModel, Field, ConfigDict, model_validator
from uuid import UUID
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from carux.config import settings

WeightField = Field(default=None, ge=0, le=100)


class TaskWeights(NamedTuple):
    """Weights combining a task's sub-scores."""
    doable: float
    usability: float
    visuals: float


class CategoryWeights(NamedTuple):
    """Weights combining a category's sub-scores; emotional is a bonus percentage."""
    tasks: float
    responsiveness: float
    writing: float
    emotional: float


class ScoringConfig(BaseModel):
    """Live weight configuration (singleton)."""

    model_config = ConfigDict(from_attributes=True)

    task_doable_weight: float = Field(default_factory=lambda: settings.DEFAULT_TASK_DOABLE_WEIGHT, ge=0)
    task_usability_weight: float = Field(default_factory=lambda: settings.DEFAULT_TASK_USABILITY_WEIGHT, ge=0)
    task_visuals_weight: float = Field(default_factory=lambda: settings.DEFAULT_TASK_VISUALS_WEIGHT, ge=0)
    category_tasks_weight: float = Field(default_factory=lambda: settings.DEFAULT_CATEGORY_TASKS_WEIGHT, ge=0)
    category_responsiveness_weight: float = Field(
        default_factory=lambda: settings.DEFAULT_CATEGORY_RESPONSIVENESS_WEIGHT, ge=0
    )
    category_writing_weight: float = Field(default_factory=lambda: settings.DEFAULT_CATEGORY_WRITING_WEIGHT, ge=0)
    category_emotional_weight: float = Field(
        default_factory=lambda: settings.DEFAULT_CATEGORY_EMOTIONAL_WEIGHT, ge=0
    )
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_by: Optional[UUID] = None

    @model_validator(mode="after")
    def validate_scorable(self):
        """A "No" answer must stay scorable and each level needs a positive base total."""
        if self.task_doable_weight <= 0:
            raise ValueError("task_doable_weight must be positive")
        if self.category_tasks_weight + self.category_responsiveness_weight + self.category_writing_weight <= 0:
            raise ValueError("Category base weights must sum to a positive value")
        return self

    @property
    def task_weights(self) -> TaskWeights:
        return TaskWeights(
            doable=self.task_doable_weight,
            usability=self.task_usability_weight,
            visuals=self.task_visuals_weight,
        )

    @property
    def category_weights(self) -> CategoryWeights:
        return CategoryWeights(
            tasks=self.category_tasks_weight,
            responsiveness=self.category_responsiveness_weight,
            writing=self.category_writing_weight,
            emotional=self.category_emotional_weight,
        )


class TaskWeightsUpdate(BaseModel):
    """Partial update of the task-level weights. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    doable_weight: Optional[float] = WeightField
    usability_weight: Optional[float] = WeightField
    visuals_weight: Optional[float] = WeightField


class CategoryWeightsUpdate(BaseModel):
    """Partial update of the category-level weights. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    tasks_weight: Optional[float] = WeightField
    responsiveness_weight: Optional[float] = WeightField
    writing_weight: Optional[float] = WeightField
    emotional_weight: Optional[float] = WeightField
