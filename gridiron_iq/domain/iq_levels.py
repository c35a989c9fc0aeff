import math
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from gridiron_iq.domain.enums import IqLevel

# Lower bound (inclusive) of each tier, highest first.
IQ_LEVEL_THRESHOLDS = [
    (90, IqLevel.ELITE),
    (80, IqLevel.VETERAN),
    (70, IqLevel.PROFICIENT),
    (60, IqLevel.DEVELOPING),
    (0, IqLevel.ROOKIE),
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (70.5 -> 71, not 70)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def clamp_score(score: float) -> float:
    if score is None or math.isnan(score):
        return 0
    return max(0, min(100, score))


def calculate_iq_level(score: float) -> IqLevel:
    """
    Map a 0-100 score to its IQ tier.

    Scores outside [0, 100] are clamped; NaN counts as 0.
    """
    score = clamp_score(score)
    for lower_bound, level in IQ_LEVEL_THRESHOLDS:
        if score >= lower_bound:
            return level
    return IqLevel.ROOKIE


def calculate_overall_level(levels: Iterable) -> IqLevel:
    """
    Predominant tier across an athlete's positions.

    Ties go to the lower tier; no levels at all means rookie.
    """
    counts = Counter(IqLevel(level) for level in levels)
    if not counts:
        return IqLevel.ROOKIE

    predominant = IqLevel.ROOKIE
    max_count = 0
    for level in IqLevel:
        if counts[level] > max_count:
            max_count = counts[level]
            predominant = level
    return predominant
