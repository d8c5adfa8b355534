"""
scoring/overall_calculator.py

Overall vehicle score = arithmetic mean of the category scores that exist.
Unscored categories are left out of both numerator and denominator.
"""

from decimal import Decimal
from typing import Iterable, Optional, Union

from carux.scoring.utils import mean_of_present

NOT_AVAILABLE = "N/A"

OverallScore = Union[Decimal, str]


def compute_overall_score(category_scores: Iterable[Optional[Decimal]]) -> OverallScore:
    """
    Args:
        category_scores: One entry per category; None for unscored ones.

    Returns:
        Mean score as Decimal, or "N/A" when no category has a score.

    Examples:
        >>> compute_overall_score([Decimal("3"), None, Decimal("4")])
        Decimal('3.5000')
        >>> compute_overall_score([None, None])
        'N/A'
    """
    mean = mean_of_present(category_scores)
    return NOT_AVAILABLE if mean is None else mean
