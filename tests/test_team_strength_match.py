"""Unit tests for the post-match team-strength update."""

from __future__ import annotations

from dataclasses import replace

import pytest

from domain.strength.common import CompetitionType, MatchObservation
from domain.strength.match_calculator import (
    actual_score,
    calculate_expected_score,
    margin_bonus,
    update_rating,
)
from domain.strength.parameters import MarginParameters, RatingParameters

PARAMS = RatingParameters.default()


def _observation(
    home_rating: float = 1500.0,
    away_rating: float = 1500.0,
    home_goals: int = 1,
    away_goals: int = 0,
    competition: CompetitionType = CompetitionType.LEAGUE,
    neutral_venue: bool = False,
) -> MatchObservation:
    return MatchObservation(
        home_rating=home_rating,
        away_rating=away_rating,
        home_goals=home_goals,
        away_goals=away_goals,
        competition=competition,
        neutral_venue=neutral_venue,
    )


def test_expected_score_equal_ratings_is_half() -> None:
    assert calculate_expected_score(1500.0, 1500.0, 400.0) == 0.5


def test_expected_scores_sum_to_one() -> None:
    outcome = update_rating(_observation(home_rating=1620.0, away_rating=1480.0), PARAMS)
    assert outcome.home_expected + outcome.away_expected == pytest.approx(1.0)
    assert 0.0 <= outcome.home_expected <= 1.0


def test_actual_score_by_goal_comparison() -> None:
    assert actual_score(2, 1) == 1.0
    assert actual_score(1, 1) == 0.5
    assert actual_score(0, 3) == 0.0


def test_equal_teams_home_win_uses_home_advantage() -> None:
    outcome = update_rating(_observation(home_goals=1, away_goals=0), PARAMS)

    home_expected = 1.0 / (1.0 + 10.0 ** (-60.0 / 400.0))
    assert outcome.home_expected == pytest.approx(home_expected)
    assert outcome.home_delta == pytest.approx(24.0 * (1.0 - home_expected) + 1.0)
    assert 8.0 <= outcome.home_delta <= 14.0
    assert outcome.home_rating == pytest.approx(1500.0 + outcome.home_delta)


def test_draw_costs_home_side_a_little() -> None:
    outcome = update_rating(_observation(home_goals=1, away_goals=1), PARAMS)
    assert -3.0 < outcome.home_delta < 0.0


def test_heavy_favourite_win_moves_rating_little() -> None:
    outcome = update_rating(
        _observation(home_rating=2000.0, away_rating=1400.0, home_goals=3, away_goals=0),
        PARAMS,
    )
    assert 0.0 < outcome.home_delta < 8.0


def test_upset_moves_rating_a_lot() -> None:
    outcome = update_rating(
        _observation(home_rating=1400.0, away_rating=2000.0, home_goals=2, away_goals=1),
        PARAMS,
    )
    assert outcome.home_delta > 20.0


def test_away_win_is_negative_for_home() -> None:
    outcome = update_rating(_observation(home_goals=0, away_goals=2), PARAMS)
    assert outcome.home_delta < 0.0
    assert outcome.away_rating > 1500.0


@pytest.mark.parametrize(
    ("home_rating", "away_rating", "home_goals", "away_goals"),
    [
        (1600.0, 1450.0, 2, 1),
        (1300.0, 1900.0, 0, 4),
        (1750.0, 1750.0, 2, 2),
        (2100.0, 1200.0, 7, 0),
    ],
)
def test_update_is_zero_sum(
    home_rating: float,
    away_rating: float,
    home_goals: int,
    away_goals: int,
) -> None:
    outcome = update_rating(
        _observation(
            home_rating=home_rating,
            away_rating=away_rating,
            home_goals=home_goals,
            away_goals=away_goals,
        ),
        PARAMS,
    )
    assert outcome.home_delta + outcome.away_delta == pytest.approx(0.0, abs=1e-9)
    assert outcome.home_rating + outcome.away_rating == pytest.approx(home_rating + away_rating)


def test_neutral_venue_equal_ratings_have_even_expectation() -> None:
    outcome = update_rating(_observation(neutral_venue=True), PARAMS)
    assert outcome.home_expected == 0.5
    assert outcome.away_expected == 0.5


def test_margin_beyond_cap_does_not_change_delta() -> None:
    three_nil = update_rating(_observation(home_goals=3, away_goals=0), PARAMS)
    five_nil = update_rating(_observation(home_goals=5, away_goals=0), PARAMS)
    assert five_nil.home_delta == three_nil.home_delta


def test_margin_bonus_is_clamped_both_ways() -> None:
    assert margin_bonus(6, 0, PARAMS.match) == pytest.approx(2.0)
    assert margin_bonus(0, 6, PARAMS.match) == pytest.approx(-2.0)
    assert margin_bonus(1, 0, PARAMS.match) == pytest.approx(1.0)


def test_disabled_margin_gives_no_bonus() -> None:
    params = replace(
        PARAMS,
        match=replace(PARAMS.match, margin=MarginParameters(enabled=False, alpha=1.0, cap_goals=2)),
    )
    one_nil = update_rating(_observation(home_goals=1, away_goals=0), params)
    four_nil = update_rating(_observation(home_goals=4, away_goals=0), params)
    assert margin_bonus(4, 0, params.match) == 0.0
    assert one_nil.home_delta == four_nil.home_delta


def test_competition_weight_scales_delta() -> None:
    league = update_rating(_observation(home_goals=2, away_goals=0), PARAMS)
    ucl = update_rating(
        _observation(home_goals=2, away_goals=0, competition=CompetitionType.UCL),
        PARAMS,
    )

    assert abs(ucl.home_delta) > abs(league.home_delta)
    ratio = ucl.home_delta / league.home_delta
    assert 1.1 < ratio < 1.3


def test_competition_can_be_given_as_string() -> None:
    by_enum = update_rating(_observation(competition=CompetitionType.UEL), PARAMS)
    by_value = update_rating(_observation(competition="uel"), PARAMS)  # type: ignore[arg-type]
    assert by_enum == by_value


def test_unknown_competition_is_configuration_error() -> None:
    with pytest.raises(ValueError, match="competition weight"):
        update_rating(_observation(competition="friendly"), PARAMS)  # type: ignore[arg-type]
