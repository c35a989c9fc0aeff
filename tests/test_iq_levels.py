import math
import pytest

from gridiron_iq.domain.enums import IqLevel
from gridiron_iq.domain.iq_levels import calculate_iq_level, calculate_overall_level, round_half_up


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, IqLevel.ROOKIE),
        (59, IqLevel.ROOKIE),
        (60, IqLevel.DEVELOPING),
        (69, IqLevel.DEVELOPING),
        (70, IqLevel.PROFICIENT),
        (80, IqLevel.VETERAN),
        (89, IqLevel.VETERAN),
        (90, IqLevel.ELITE),
        (100, IqLevel.ELITE),
    ],
)
def test_tier_thresholds(score, expected):
    assert calculate_iq_level(score) == expected


def test_tiers_never_decrease_as_score_rises():
    ranks = [calculate_iq_level(s).rank for s in range(0, 101)]
    assert ranks == sorted(ranks)
    assert ranks[0] == IqLevel.ROOKIE.rank
    assert ranks[-1] == IqLevel.ELITE.rank


@pytest.mark.parametrize(
    "score, expected",
    [(-12, IqLevel.ROOKIE), (100.4, IqLevel.ELITE), (250, IqLevel.ELITE), (math.nan, IqLevel.ROOKIE)],
)
def test_out_of_range_scores_are_clamped(score, expected):
    assert calculate_iq_level(score) == expected


def test_round_half_up():
    assert round_half_up(70.5) == 71
    assert round_half_up(72.5) == 73
    assert round_half_up(66.66) == 67
    assert round_half_up(80) == 80


def test_overall_level_is_predominant_tier():
    levels = ["veteran", "rookie", "veteran", "elite"]
    assert calculate_overall_level(levels) == IqLevel.VETERAN


def test_overall_level_tie_goes_to_lower_tier():
    assert calculate_overall_level(["elite", "developing"]) == IqLevel.DEVELOPING


def test_overall_level_without_records_is_rookie():
    assert calculate_overall_level([]) == IqLevel.ROOKIE
