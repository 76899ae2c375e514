"""Chronological replay of match results into per-team base ratings."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from domain.strength.common import CompetitionType, MatchObservation
from domain.strength.mapping import to_display
from domain.strength.match_calculator import actual_score, update_rating
from domain.strength.parameters import RatingParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchRecord:
    """Stored match row as read from the match feed."""

    match_id: int
    match_date: date
    home_team_id: int
    away_team_id: int
    home_goals: int | None
    away_goals: int | None
    competition: CompetitionType = CompetitionType.LEAGUE
    neutral_venue: bool = False


@dataclass(frozen=True)
class TeamRatingEvent:
    team_id: int
    opponent_team_id: int
    match_id: int
    match_date: date
    is_home: bool
    goals_for: int
    goals_against: int
    actual_score: float
    expected_score: float
    pre_rating: float
    rating_delta: float
    post_rating: float
    display_score: float


class TeamStrengthReplay:
    """Stateful match-by-match base-rating tracker."""

    def __init__(self, params: RatingParameters, *, initial_rating: float = 1500.0) -> None:
        self.params = params
        self.initial_rating = initial_rating
        self._ratings: dict[int, float] = {}
        self.skipped_matches = 0

    def get_rating(self, team_id: int) -> float:
        return self._ratings.get(team_id, self.initial_rating)

    def tracked_team_count(self) -> int:
        return len(self._ratings)

    def ratings(self) -> dict[int, float]:
        """Return a snapshot of current team ratings."""
        return dict(self._ratings)

    def process_match(self, record: MatchRecord) -> tuple[TeamRatingEvent, TeamRatingEvent] | None:
        if record.home_team_id == record.away_team_id:
            raise ValueError(
                f"match_id={record.match_id} has identical teams ({record.home_team_id})"
            )
        if record.home_goals is None or record.away_goals is None:
            self.skipped_matches += 1
            logger.debug("skipping match_id=%s without a final score", record.match_id)
            return None

        home_pre = self.get_rating(record.home_team_id)
        away_pre = self.get_rating(record.away_team_id)
        outcome = update_rating(
            MatchObservation(
                home_rating=home_pre,
                away_rating=away_pre,
                home_goals=record.home_goals,
                away_goals=record.away_goals,
                competition=record.competition,
                neutral_venue=record.neutral_venue,
            ),
            self.params,
        )

        self._ratings[record.home_team_id] = outcome.home_rating
        self._ratings[record.away_team_id] = outcome.away_rating

        home_actual = actual_score(record.home_goals, record.away_goals)
        home_event = TeamRatingEvent(
            team_id=record.home_team_id,
            opponent_team_id=record.away_team_id,
            match_id=record.match_id,
            match_date=record.match_date,
            is_home=True,
            goals_for=record.home_goals,
            goals_against=record.away_goals,
            actual_score=home_actual,
            expected_score=outcome.home_expected,
            pre_rating=home_pre,
            rating_delta=outcome.home_delta,
            post_rating=outcome.home_rating,
            display_score=to_display(outcome.home_rating, self.params),
        )
        away_event = TeamRatingEvent(
            team_id=record.away_team_id,
            opponent_team_id=record.home_team_id,
            match_id=record.match_id,
            match_date=record.match_date,
            is_home=False,
            goals_for=record.away_goals,
            goals_against=record.home_goals,
            actual_score=1.0 - home_actual,
            expected_score=outcome.away_expected,
            pre_rating=away_pre,
            rating_delta=outcome.away_delta,
            post_rating=outcome.away_rating,
            display_score=to_display(outcome.away_rating, self.params),
        )
        return home_event, away_event

    def process_matches(self, records: Iterable[MatchRecord]) -> list[TeamRatingEvent]:
        """Replay matches in (date, match_id) order and collect all rating events."""
        events: list[TeamRatingEvent] = []
        for record in sorted(records, key=lambda item: (item.match_date, item.match_id)):
            result = self.process_match(record)
            if result is not None:
                events.extend(result)
        return events
