"""
scoring/category_calculator.py

Computes a category score from the average task score and the
category-wide ratings.

Formula:
    base  = Σ(fraction × weight) / Σ(weights present) × 4
            over tasks (avg_task_score / 4), responsiveness (/4), writing (/4)
    bonus = (emotional_score / 4) × (emotional_weight / 100) × 4
    score = base + bonus

The emotional term is a pure bonus: it is added after normalization,
never enters the denominator, never subtracts, and may lift the score
above 4.0. Without a base there is no score, bonus or not.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from carux.models.scoring_config import CategoryWeights
from carux.scoring.utils import (
    SCALE_MAX,
    quantize,
    rating_fraction,
    read_field,
    weighted_presence_score,
)


@dataclass(frozen=True)
class CategoryScoreResult:
    """Output of calculate_category_breakdown()."""
    base_score: Optional[Decimal]      # [0, 4] or None
    emotional_bonus: Optional[Decimal] # >= 0, None when emotional is unrated
    category_score: Optional[Decimal]  # base + bonus, may exceed 4


def calculate_category_breakdown(
    avg_task_score: Optional[Decimal],
    category_evaluation: Any,
    weights: CategoryWeights,
) -> CategoryScoreResult:
    """
    Args:
        avg_task_score: Mean task score on the 0-4 scale, or None if no
                        task in the category was scorable.
        category_evaluation: CategoryEvaluation, mapping, or None.
        weights: CategoryWeights (tasks, responsiveness, writing, emotional).

    Returns:
        CategoryScoreResult; every field None when nothing is present.
    """
    task_fraction = (
        None if avg_task_score is None
        else Decimal(str(avg_task_score)) / SCALE_MAX
    )

    base = weighted_presence_score(
        [
            (weights.tasks, task_fraction),
            (
                weights.responsiveness,
                rating_fraction(read_field(category_evaluation, "responsiveness_score")),
            ),
            (
                weights.writing,
                rating_fraction(read_field(category_evaluation, "writing_score")),
            ),
        ]
    )

    emotional = rating_fraction(read_field(category_evaluation, "emotional_score"))
    bonus = None
    if emotional is not None:
        bonus = quantize(
            emotional * (Decimal(str(weights.emotional)) / Decimal("100")) * SCALE_MAX
        )

    if base is None:
        return CategoryScoreResult(base_score=None, emotional_bonus=bonus, category_score=None)

    score = base + bonus if bonus is not None else base
    return CategoryScoreResult(
        base_score=base,
        emotional_bonus=bonus,
        category_score=quantize(score),
    )


def compute_category_score(
    avg_task_score: Optional[Decimal],
    category_evaluation: Any,
    weights: CategoryWeights,
) -> Optional[Decimal]:
    """
    Category score on the 0-4(+bonus) scale, or None when unscorable.

    Examples:
        >>> compute_category_score(
        ...     Decimal("3.2"),
        ...     {"responsiveness_score": 4, "writing_score": 4, "emotional_score": 4},
        ...     CategoryWeights(80, 15, 5, 5),
        ... )
        Decimal('3.5600')
    """
    return calculate_category_breakdown(
        avg_task_score, category_evaluation, weights
    ).category_score
