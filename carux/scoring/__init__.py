"""
scoring/: Evaluation Scoring Engine

Modules:
    utils.py                - Decimal utilities and the presence-weighted fold
    task_calculator.py      - Task score (doable / usability / visuals)
    category_calculator.py  - Category score with uncapped emotional bonus
    overall_calculator.py   - Overall score (mean of scored categories)
    scale.py                - 0-4 ↔ 0-100 conversion, display formatting, rating labels

All calculators are pure functions on the 0-4 scale.
"""

from carux.scoring.category_calculator import (
    CategoryScoreResult,
    calculate_category_breakdown,
    compute_category_score,
)
from carux.scoring.overall_calculator import NOT_AVAILABLE, compute_overall_score
from carux.scoring.task_calculator import compute_task_score

__all__ = [
    "CategoryScoreResult",
    "NOT_AVAILABLE",
    "calculate_category_breakdown",
    "compute_category_score",
    "compute_overall_score",
    "compute_task_score",
]
