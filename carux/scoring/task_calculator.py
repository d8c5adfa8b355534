# carux/scoring/task_calculator.py
"""
Task Score Calculator
---------------------
Scores one task evaluation on the 0-4 scale.

Formula:
    doable      → 1 if Yes, 0 if No (weight always counted once answered)
    usability   → usability_score / 4 (weight counted only if rated)
    visuals     → visuals_score / 4   (weight counted only if rated)
    task_score  = Σ(fraction × weight) / Σ(weights present) × 4

An unanswered `doable` makes the task unscorable (None).

Default weights (ScoringConfig):
    doable      43.75
    usability   37.50
    visuals     18.75
"""
from decimal import Decimal
from typing import Any, Optional

from carux.models.scoring_config import TaskWeights
from carux.scoring.utils import rating_fraction, read_field, weighted_presence_score


def compute_task_score(evaluation: Any, weights: TaskWeights) -> Optional[Decimal]:
    """
    Args:
        evaluation: TaskEvaluation, mapping, or None. Fields read:
                    doable, usability_score, visuals_score.
        weights: TaskWeights (doable, usability, visuals).

    Returns:
        Score in [0, 4] quantized to 0.0001, or None when unscorable.

    Examples:
        >>> compute_task_score(
        ...     {"doable": True, "usability_score": 4, "visuals_score": 4},
        ...     TaskWeights(43.75, 37.5, 18.75),
        ... )
        Decimal('4.0000')
    """
    doable = read_field(evaluation, "doable")
    if doable is None:
        return None

    return weighted_presence_score(
        [
            (weights.doable, Decimal("1") if doable else Decimal("0")),
            (weights.usability, rating_fraction(read_field(evaluation, "usability_score"))),
            (weights.visuals, rating_fraction(read_field(evaluation, "visuals_score"))),
        ]
    )
