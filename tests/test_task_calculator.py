"""
Task Score Calculator Tests
tests/test_task_calculator.py
"""

from decimal import Decimal

import pytest

from carux.models.evaluation import TaskEvaluationInput
from carux.models.scoring_config import TaskWeights
from carux.scoring.task_calculator import compute_task_score

DEFAULT_WEIGHTS = TaskWeights(doable=43.75, usability=37.5, visuals=18.75)


class TestComputeTaskScore:
    """Presence-weighted task scoring on the 0-4 scale."""

    def test_perfect_task_scores_maximum(self):
        """Doable with top ratings is 4.0 (100%)."""
        score = compute_task_score(
            {"doable": True, "usability_score": 4, "visuals_score": 4}, DEFAULT_WEIGHTS
        )
        assert score == Decimal("4.0000")

    def test_not_doable_with_partial_ratings(self):
        """(0 + 0.5 × 37.5) / (43.75 + 37.5) × 4."""
        score = compute_task_score(
            {"doable": False, "usability_score": 2, "visuals_score": None}, DEFAULT_WEIGHTS
        )
        assert score == Decimal("0.9231")

    def test_unanswered_doable_is_unscorable(self):
        score = compute_task_score({"usability_score": 4, "visuals_score": 4}, DEFAULT_WEIGHTS)
        assert score is None

    def test_missing_evaluation_is_unscorable(self):
        assert compute_task_score(None, DEFAULT_WEIGHTS) is None

    def test_doable_only(self):
        assert compute_task_score({"doable": True}, DEFAULT_WEIGHTS) == Decimal("4.0000")
        assert compute_task_score({"doable": False}, DEFAULT_WEIGHTS) == Decimal("0.0000")

    def test_absent_rating_drops_its_weight(self):
        """Missing visuals is excluded from the denominator, not counted as zero."""
        with_visuals_missing = compute_task_score(
            {"doable": True, "usability_score": 4}, DEFAULT_WEIGHTS
        )
        assert with_visuals_missing == Decimal("4.0000")

    def test_accepts_model_instances(self):
        evaluation = TaskEvaluationInput(doable=True, usability_score=3, visuals_score=2)
        # (43.75 + 0.75 × 37.5 + 0.5 × 18.75) / 100 × 4 = 3.25
        assert compute_task_score(evaluation, DEFAULT_WEIGHTS) == Decimal("3.2500")

    def test_zero_present_weight_is_unscorable(self):
        weights = TaskWeights(doable=0, usability=0, visuals=0)
        assert compute_task_score({"doable": True, "usability_score": 4}, weights) is None

    @pytest.mark.parametrize("usability", [1, 2, 3, 4])
    def test_result_within_scale(self, usability):
        score = compute_task_score(
            {"doable": False, "usability_score": usability, "visuals_score": 1}, DEFAULT_WEIGHTS
        )
        assert Decimal("0") <= score <= Decimal("4")

    def test_custom_weights_change_result(self):
        weights = TaskWeights(doable=0, usability=50, visuals=50)
        score = compute_task_score(
            {"doable": False, "usability_score": 4, "visuals_score": 2}, weights
        )
        # doable weight 0 still "present" but adds nothing: (0 + 50 + 25) / 100 × 4
        assert score == Decimal("3.0000")
