"""Database repository helpers."""

from repositories.team_strength_repository import (
    TeamStrengthSummary,
    count_tracked_teams,
    delete_team_strength_events,
    ensure_team_strength_schema,
    fetch_match_records,
    fetch_team_strength_summaries,
    insert_team_strength_events,
)

__all__ = [
    "TeamStrengthSummary",
    "count_tracked_teams",
    "delete_team_strength_events",
    "ensure_team_strength_schema",
    "fetch_match_records",
    "fetch_team_strength_summaries",
    "insert_team_strength_events",
]
