"""
Score scale conversion and rating vocabulary.

Scores are computed on the 0-4 scale. The 0-100 scale exists only at the
presentation boundary; convert with to_scale() / from_scale() and nowhere
else.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

from carux.config import settings
from carux.models.enumerations import Criterion, ScoreScale
from carux.scoring.overall_calculator import NOT_AVAILABLE
from carux.scoring.utils import Number, SCALE_MAX, quantize

NOT_RATED = "Not rated"

_PERCENT_FACTOR = Decimal("100") / SCALE_MAX  # 25


def to_scale(score: Optional[Number], scale: ScoreScale) -> Optional[Decimal]:
    """Convert a 0-4 score to `scale`. None passes through."""
    if score is None:
        return None
    value = Decimal(str(score))
    if scale is ScoreScale.PERCENT:
        return quantize(value * _PERCENT_FACTOR)
    return quantize(value)


def from_scale(score: Optional[Number], scale: ScoreScale) -> Optional[Decimal]:
    """Convert a score expressed on `scale` back to 0-4. None passes through."""
    if score is None:
        return None
    value = Decimal(str(score))
    if scale is ScoreScale.PERCENT:
        return quantize(value / _PERCENT_FACTOR)
    return quantize(value)


def rescale(
    score: Optional[Number], source: ScoreScale, target: ScoreScale
) -> Optional[Decimal]:
    if source is target:
        return None if score is None else quantize(Decimal(str(score)))
    return to_scale(from_scale(score, source), target)


def format_score(score: Union[Number, str, None], decimal_places: Optional[int] = None) -> str:
    """Render a score for display; missing scores render as "N/A", never "0"."""
    if score is None or score == NOT_AVAILABLE:
        return NOT_AVAILABLE
    if decimal_places is None:
        decimal_places = settings.SCORE_DISPLAY_DECIMALS
    quantum = Decimal(10) ** -decimal_places
    return str(Decimal(str(score)).quantize(quantum, rounding=ROUND_HALF_UP))


SCALE_DESCRIPTIONS: Dict[Criterion, Dict[int, Dict[str, str]]] = {
    Criterion.USABILITY: {
        1: {"label": "Very difficult", "description": "I frequently struggled to complete it."},
        2: {"label": "Somewhat difficult", "description": "I encountered some challenges and it wasn't always intuitive."},
        3: {"label": "Generally easy", "description": "I could usually complete it without much difficulty."},
        4: {"label": "Very easy", "description": "I could easily understand and operate it."},
    },
    Criterion.VISUALS: {
        1: {"label": "Very poor", "description": "It was unattractive, confusing, or ineffective."},
        2: {"label": "Somewhat poor", "description": "It had some issues with aesthetics, clarity, or consistency."},
        3: {"label": "Good", "description": "It was reasonably attractive, clear, and consistent."},
        4: {"label": "Excellent", "description": "It was highly attractive, clear, and effective."},
    },
    Criterion.RESPONSIVENESS: {
        1: {"label": "Very poor", "description": "It felt slow, laggy, and unclear."},
        2: {"label": "Somewhat poor", "description": "There were noticeable delays, lag, or unclear feedback."},
        3: {"label": "Good", "description": "It felt reasonably responsive with clear feedback."},
        4: {"label": "Excellent", "description": "It felt very smooth, responsive, and provided clear, immediate feedback."},
    },
    Criterion.WRITING: {
        1: {"label": "Very poor", "description": "It was confusing, inaccurate, inconsistent, or contained errors."},
        2: {"label": "Somewhat poor", "description": "It had some issues with clarity, consistency, conciseness, or accuracy."},
        3: {"label": "Reasonably clear", "description": "It was reasonably clear, consistent, concise, and accurate."},
        4: {"label": "Excellent", "description": "It was very clear, consistent, concise, and accurate."},
    },
    Criterion.EMOTIONAL: {
        1: {"label": "Negative", "description": "It felt frustrating, impersonal, or unpleasant."},
        2: {"label": "Neutral", "description": "It didn't evoke strong feelings, positive or negative."},
        3: {"label": "Positive", "description": "It felt enjoyable, satisfying, or engaging."},
        4: {"label": "Strongly positive", "description": "It felt delightful, exciting, or created a sense of connection."},
    },
}


def _lookup(score: Optional[Number], criterion: Criterion) -> Optional[Dict[str, str]]:
    rounded = int(Decimal(str(score)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return SCALE_DESCRIPTIONS[Criterion(criterion)].get(rounded)


def score_label(score: Optional[Number], criterion: Criterion) -> str:
    """Label for a 1-4 rating, e.g. 3 on usability → "Generally easy"."""
    if score is None:
        return NOT_RATED
    entry = _lookup(score, criterion)
    return entry["label"] if entry else "Invalid score"


def score_description(score: Optional[Number], criterion: Criterion) -> str:
    if score is None:
        return ""
    entry = _lookup(score, criterion)
    return entry["description"] if entry else ""
