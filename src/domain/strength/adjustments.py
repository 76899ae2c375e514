"""Situational rating adjustments: injuries, transfers, manager changes, fatigue."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from math import exp

from domain.strength.common import (
    DerivedImpact,
    DirectImpact,
    ManagerChangeEvent,
    PlayerAbsence,
    PlayerImpact,
    TransferDirection,
    TransferEvent,
)
from domain.strength.parameters import InjuryParameters, RatingParameters


def _elapsed_days(as_of_date: date, event_date: date) -> float:
    return float((as_of_date - event_date).days)


def player_impact(impact: PlayerImpact, params: InjuryParameters) -> float:
    """Resolve a direct or derived impact score."""
    if isinstance(impact, DirectImpact):
        return impact.value
    if isinstance(impact, DerivedImpact):
        minutes_share = min(max(impact.minutes_played, 0) / params.minutes_reference, 1.0)
        tier_score = params.value_tier_scores[impact.value_tier]
        return params.minutes_share_weight * minutes_share + params.value_tier_weight * tier_score
    raise TypeError(f"unsupported impact type: {type(impact).__name__}")


def injury_adjustment(absences: Sequence[PlayerAbsence], params: RatingParameters) -> float:
    """-beta * sum(impact * status * position * duration) over current absences."""
    if not absences:
        return 0.0

    injury_params = params.injuries
    total = 0.0
    for absence in absences:
        total += (
            player_impact(absence.impact, injury_params)
            * injury_params.status_weights[absence.status]
            * injury_params.position_weights[absence.position]
            * injury_params.duration_weights[absence.duration]
        )
    return -injury_params.beta * total


def transfer_ramp(as_of_date: date, effective_date: date, tau_days: float) -> float:
    """Linear 0 -> 1 phase-in over tau_days, clamped on both ends."""
    return max(0.0, min(_elapsed_days(as_of_date, effective_date) / tau_days, 1.0))


def transfer_adjustment(
    transfers: Sequence[TransferEvent],
    as_of_date: date,
    params: RatingParameters,
) -> float:
    if not transfers:
        return 0.0

    transfer_params = params.transfers
    adjustment = 0.0
    for transfer in transfers:
        ramp = transfer_ramp(
            as_of_date,
            transfer.effective_date,
            transfer_params.tau_days[transfer.transfer_type],
        )
        contribution = transfer_params.gamma * transfer.impact * ramp
        if transfer.direction == TransferDirection.IN:
            adjustment += contribution
        else:
            adjustment -= contribution
    return adjustment


def manager_adjustment(
    manager_change: ManagerChangeEvent | None,
    as_of_date: date,
    params: RatingParameters,
) -> float:
    """Exponentially decaying new-manager effect.

    Elapsed time is clamped at zero, so a change dated after ``as_of_date``
    contributes its full tier delta instead of a growing exponential.
    """
    if manager_change is None:
        return 0.0

    manager_params = params.manager
    elapsed = max(0.0, _elapsed_days(as_of_date, manager_change.change_date))
    return manager_params.tier_deltas[manager_change.tier] * exp(-elapsed / manager_params.lambda_days)


def fatigue_adjustment(rest_days: int, matches_in_14_days: int, params: RatingParameters) -> float:
    fatigue = params.fatigue
    rest_penalty = fatigue.phi * max(0, fatigue.rest_days_threshold - rest_days)
    congestion_penalty = fatigue.psi * max(0, matches_in_14_days - fatigue.matches_threshold)
    return -rest_penalty - congestion_penalty
