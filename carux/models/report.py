from pydantic import BaseModel, Field
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Literal, Optional, List, Union

from carux.models.enumerations import ScoreScale
from carux.scoring.overall_calculator import NOT_AVAILABLE
from carux.scoring.scale import NOT_RATED, format_score, rescale


class CategoryScoreBreakdown(BaseModel):
    """Per-category line of a report. Scores are on the report's scale."""

    category_id: UUID
    category_name: str
    icon: str = "category"
    tasks_total: int = Field(..., ge=0)
    tasks_evaluated: int = Field(..., ge=0)
    task_score: Optional[float] = Field(default=None, description="Mean of scorable task scores")
    responsiveness_score: Optional[int] = Field(default=None, ge=1, le=4)
    writing_score: Optional[int] = Field(default=None, ge=1, le=4)
    emotional_score: Optional[int] = Field(default=None, ge=1, le=4)
    responsiveness_label: str = NOT_RATED
    writing_label: str = NOT_RATED
    emotional_label: str = NOT_RATED
    base_score: Optional[float] = None
    emotional_bonus: Optional[float] = None
    score: Optional[float] = Field(default=None, description="base + bonus; may exceed the scale maximum")
    score_display: str = NOT_AVAILABLE
    category_evaluated: bool = False


class TaskIssue(BaseModel):
    """Task worth attention in the report summary."""

    task_id: UUID
    task_name: str
    category_name: str
    kind: Literal["not_doable", "low_score"]
    score: Optional[float] = None
    reason: Optional[str] = None


class Report(BaseModel):
    """
    Read-only aggregate handed to the export collaborator.

    Derived from evaluations and regenerable at any time; never
    authoritative.
    """

    id: UUID = Field(default_factory=uuid4)
    review_id: UUID
    taxonomy_version_id: UUID
    scale: ScoreScale = ScoreScale.FOUR_POINT
    category_scores: List[CategoryScoreBreakdown] = Field(default_factory=list)
    overall_score: Union[float, Literal["N/A"]] = NOT_AVAILABLE
    overall_display: str = NOT_AVAILABLE
    summary: str = ""
    top_issues: List[TaskIssue] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def rescaled(self, scale: ScoreScale) -> "Report":
        """Copy of this report with every score expressed on `scale`."""
        if scale is self.scale:
            return self.model_copy(deep=True)

        def conv(value: Optional[float]) -> Optional[float]:
            converted = rescale(value, self.scale, scale)
            return None if converted is None else float(converted)

        categories = [
            line.model_copy(
                update={
                    "task_score": conv(line.task_score),
                    "base_score": conv(line.base_score),
                    "emotional_bonus": conv(line.emotional_bonus),
                    "score": conv(line.score),
                    "score_display": format_score(conv(line.score)),
                }
            )
            for line in self.category_scores
        ]
        issues = [
            issue.model_copy(update={"score": conv(issue.score)})
            for issue in self.top_issues
        ]
        overall = (
            self.overall_score
            if self.overall_score == NOT_AVAILABLE
            else conv(self.overall_score)
        )
        return self.model_copy(
            update={
                "scale": scale,
                "category_scores": categories,
                "top_issues": issues,
                "overall_score": overall,
                "overall_display": format_score(overall),
            }
        )


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
