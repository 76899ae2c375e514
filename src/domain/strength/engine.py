"""Compose base rating and situational adjustments into one team rating."""

from __future__ import annotations

from domain.strength.adjustments import (
    fatigue_adjustment,
    injury_adjustment,
    manager_adjustment,
    transfer_adjustment,
)
from domain.strength.common import RatingBreakdown, TeamSnapshot
from domain.strength.mapping import to_display
from domain.strength.parameters import RatingParameters


def compute_rating(snapshot: TeamSnapshot, params: RatingParameters) -> RatingBreakdown:
    """Return every component of a team's rating for the snapshot's as-of date."""
    injury = injury_adjustment(snapshot.absences, params)
    transfer = transfer_adjustment(snapshot.transfers, snapshot.as_of_date, params)
    manager = manager_adjustment(snapshot.manager_change, snapshot.as_of_date, params)
    fatigue = fatigue_adjustment(snapshot.rest_days, snapshot.matches_in_14_days, params)

    total_raw = snapshot.base_rating + injury + transfer + manager + fatigue
    return RatingBreakdown(
        base_rating=snapshot.base_rating,
        injury_adjustment=injury,
        transfer_adjustment=transfer,
        manager_adjustment=manager,
        fatigue_adjustment=fatigue,
        total_raw=total_raw,
        display_score=to_display(total_raw, params),
    )
