"""Post-match rating update for club team strength."""

from __future__ import annotations

from domain.strength.common import CompetitionType, MatchObservation, MatchOutcome
from domain.strength.parameters import MatchParameters, RatingParameters


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float,
    home_advantage: float = 0.0,
) -> float:
    """Compute the Elo expected score for one side, including any home advantage."""
    return 1.0 / (1.0 + 10.0 ** (-(rating - opponent_rating + home_advantage) / scale_factor))


def actual_score(home_goals: int, away_goals: int) -> float:
    if home_goals > away_goals:
        return 1.0
    if home_goals < away_goals:
        return 0.0
    return 0.5


def competition_weight(competition: CompetitionType | str, params: MatchParameters) -> float:
    try:
        return params.competition_weights[CompetitionType(competition)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"no competition weight configured for {competition!r}") from exc


def margin_bonus(home_goals: int, away_goals: int, params: MatchParameters) -> float:
    """Linear bonus on goal difference, clamped to +/- cap_goals."""
    margin = params.margin
    if not margin.enabled:
        return 0.0
    goal_difference = home_goals - away_goals
    capped = max(-margin.cap_goals, min(goal_difference, margin.cap_goals))
    return margin.alpha * capped


def update_rating(observation: MatchObservation, params: RatingParameters) -> MatchOutcome:
    """Apply one finished match to both teams' ratings.

    The home delta is ``K * (S - E_home) + margin_bonus`` and the away delta is
    its exact negation, so the update is zero-sum.
    """
    match_params = params.match
    effective_k = match_params.k_base * competition_weight(observation.competition, match_params)
    home_advantage = 0.0 if observation.neutral_venue else match_params.home_advantage

    home_expected = calculate_expected_score(
        rating=observation.home_rating,
        opponent_rating=observation.away_rating,
        scale_factor=match_params.scale_factor,
        home_advantage=home_advantage,
    )
    away_expected = 1.0 - home_expected

    home_actual = actual_score(observation.home_goals, observation.away_goals)
    home_delta = effective_k * (home_actual - home_expected) + margin_bonus(
        observation.home_goals,
        observation.away_goals,
        match_params,
    )
    away_delta = -home_delta

    return MatchOutcome(
        home_rating=observation.home_rating + home_delta,
        away_rating=observation.away_rating + away_delta,
        home_delta=home_delta,
        away_delta=away_delta,
        home_expected=home_expected,
        away_expected=away_expected,
    )
