"""
Decimal Utilities
carux/scoring/utils.py

Precision-safe decimal math shared by the task, category and overall
calculators.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

Number = Union[int, float, Decimal]

SCALE_MAX = Decimal("4")
RATING_MAX = Decimal("4")
QUANTUM = Decimal("0.0001")


def quantize(value: Decimal) -> Decimal:
    return value.quantize(QUANTUM, rounding=ROUND_HALF_UP)


def rating_fraction(rating: Optional[Number]) -> Optional[Decimal]:
    """Map a 1-4 rating to its fraction of the maximum; None stays None."""
    if rating is None:
        return None
    return Decimal(str(rating)) / RATING_MAX


def read_field(source: Any, name: str) -> Any:
    """Read `name` from a mapping or an attribute-bearing object; missing → None."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def weighted_presence_score(
    components: Iterable[Tuple[Number, Optional[Decimal]]],
) -> Optional[Decimal]:
    """
    Fold (weight, fraction-or-None) pairs into a score on the 0-4 scale.

    Formula: Σ(fraction_i × weight_i) / Σ(weight_i) × 4, over present pairs only.

    An absent fraction drops its weight from the denominator instead of
    counting as zero. Returns None when the present weights sum to zero,
    so the result never comes from a division by zero.
    """
    numerator = Decimal("0")
    total_weight = Decimal("0")
    for weight, fraction in components:
        if fraction is None:
            continue
        w = Decimal(str(weight))
        numerator += fraction * w
        total_weight += w

    if total_weight == 0:
        return None

    return quantize(numerator / total_weight * SCALE_MAX)


def mean_of_present(values: Iterable[Optional[Decimal]]) -> Optional[Decimal]:
    """Arithmetic mean over non-None values; None when nothing is present."""
    present: List[Decimal] = [v for v in values if v is not None]
    if not present:
        return None
    return quantize(sum(present) / Decimal(len(present)))
