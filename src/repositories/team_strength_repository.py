"""Persistence helpers for team-strength rating events using SQLAlchemy."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Integer,
    MetaData,
    String,
    Table,
    delete,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.strength.common import CompetitionType
from domain.strength.replay import MatchRecord, TeamRatingEvent
from models import Base, TeamStrengthEvent

match_metadata = MetaData()

matches_table = Table(
    "matches",
    match_metadata,
    Column("id", Integer, primary_key=True),
    Column("date", Date),
    Column("home_team_id", Integer),
    Column("away_team_id", Integer),
    Column("home_goals", Integer),
    Column("away_goals", Integer),
    Column("competition", String),
    Column("neutral_venue", Boolean),
)


def ensure_team_strength_schema(engine: Engine) -> None:
    """Create the team_strength_events table and its indexes if they do not exist."""
    Base.metadata.create_all(bind=engine, tables=[TeamStrengthEvent.__table__])


def fetch_match_records(session: Session) -> list[MatchRecord]:
    """Fetch stored matches in deterministic chronological order."""
    statement = select(
        matches_table.c.id,
        matches_table.c.date,
        matches_table.c.home_team_id,
        matches_table.c.away_team_id,
        matches_table.c.home_goals,
        matches_table.c.away_goals,
        matches_table.c.competition,
        matches_table.c.neutral_venue,
    ).order_by(matches_table.c.date, matches_table.c.id)

    records: list[MatchRecord] = []
    for row in session.execute(statement).mappings():
        match_date = row["date"]
        if isinstance(match_date, datetime):
            match_date = match_date.date()
        if not isinstance(match_date, date):
            raise ValueError(f"match_id={row['id']} has invalid date={match_date!r}")

        records.append(
            MatchRecord(
                match_id=row["id"],
                match_date=match_date,
                home_team_id=row["home_team_id"],
                away_team_id=row["away_team_id"],
                home_goals=row["home_goals"],
                away_goals=row["away_goals"],
                competition=CompetitionType(row["competition"] or CompetitionType.LEAGUE),
                neutral_venue=bool(row["neutral_venue"]),
            )
        )
    return records


def delete_team_strength_events(session: Session, system_name: str) -> None:
    """Remove all stored events for one system before a deterministic rebuild."""
    session.execute(delete(TeamStrengthEvent).where(TeamStrengthEvent.system_name == system_name))


def insert_team_strength_events(
    session: Session,
    system_name: str,
    events: Sequence[TeamRatingEvent],
) -> None:
    """Bulk insert rating events."""
    if not events:
        return

    payload = [
        {
            "system_name": system_name,
            "team_id": event.team_id,
            "opponent_team_id": event.opponent_team_id,
            "match_id": event.match_id,
            "match_date": event.match_date,
            "is_home": event.is_home,
            "goals_for": event.goals_for,
            "goals_against": event.goals_against,
            "actual_score": event.actual_score,
            "expected_score": event.expected_score,
            "pre_rating": event.pre_rating,
            "rating_delta": event.rating_delta,
            "post_rating": event.post_rating,
            "display_score": event.display_score,
        }
        for event in events
    ]
    session.execute(insert(TeamStrengthEvent), payload)


def count_tracked_teams(session: Session, system_name: str) -> int:
    """Count teams with at least one stored event for a system."""
    statement = select(func.count(func.distinct(TeamStrengthEvent.team_id))).where(
        TeamStrengthEvent.system_name == system_name
    )
    result = session.scalar(statement)
    return int(result or 0)


FORM_LENGTH = 5
_RESULT_LETTERS = {1.0: "W", 0.5: "D", 0.0: "L"}
_RESULT_POINTS = {"W": 3, "D": 1, "L": 0}


@dataclass(frozen=True)
class TeamStrengthSummary:
    """Current standing of one team as of its latest stored event."""

    rank: int
    team_id: int
    post_rating: float
    display_score: float
    matches_processed: int
    last_match_date: date
    last_results: tuple[str, ...]

    @property
    def form(self) -> float:
        """Share of available points from the last five results, rounded to 2 places."""
        points = sum(_RESULT_POINTS[result] for result in self.last_results)
        return round(points / (3 * FORM_LENGTH), 2)


def fetch_team_strength_summaries(
    session: Session,
    system_name: str,
    *,
    top_n: int | None = None,
) -> list[TeamStrengthSummary]:
    """Rank teams by their latest base rating for one system.

    ``last_results`` holds up to five W/D/L letters, oldest first.
    """
    recency = (
        func.row_number()
        .over(
            partition_by=TeamStrengthEvent.team_id,
            order_by=(TeamStrengthEvent.match_date.desc(), TeamStrengthEvent.match_id.desc()),
        )
        .label("recency")
    )
    matches_processed = (
        func.count().over(partition_by=TeamStrengthEvent.team_id).label("matches_processed")
    )
    ranked = (
        select(
            TeamStrengthEvent.team_id,
            TeamStrengthEvent.match_date,
            TeamStrengthEvent.actual_score,
            TeamStrengthEvent.post_rating,
            TeamStrengthEvent.display_score,
            recency,
            matches_processed,
        )
        .where(TeamStrengthEvent.system_name == system_name)
        .subquery()
    )
    statement = (
        select(ranked)
        .where(ranked.c.recency <= FORM_LENGTH)
        .order_by(ranked.c.team_id, ranked.c.recency)
    )

    latest: dict[int, dict] = {}
    results: dict[int, list[str]] = {}
    for row in session.execute(statement).mappings():
        team_id = row["team_id"]
        if row["recency"] == 1:
            latest[team_id] = dict(row)
        results.setdefault(team_id, []).append(_RESULT_LETTERS[row["actual_score"]])

    ordered = sorted(latest.values(), key=lambda row: (-row["post_rating"], row["team_id"]))
    if top_n is not None:
        ordered = ordered[:top_n]

    return [
        TeamStrengthSummary(
            rank=index,
            team_id=row["team_id"],
            post_rating=row["post_rating"],
            display_score=row["display_score"],
            matches_processed=row["matches_processed"],
            last_match_date=row["match_date"],
            last_results=tuple(reversed(results[row["team_id"]])),
        )
        for index, row in enumerate(ordered, start=1)
    ]
