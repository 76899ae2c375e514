"""Unit tests for injury, transfer, manager and fatigue adjustments."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from math import exp

import pytest

from domain.strength.adjustments import (
    fatigue_adjustment,
    injury_adjustment,
    manager_adjustment,
    player_impact,
    transfer_adjustment,
    transfer_ramp,
)
from domain.strength.common import (
    AbsenceStatus,
    DerivedImpact,
    DirectImpact,
    DurationCategory,
    ManagerChangeEvent,
    ManagerTier,
    PlayerAbsence,
    PositionCategory,
    TransferDirection,
    TransferEvent,
    TransferType,
    ValueTier,
)
from domain.strength.parameters import FatigueParameters, RatingParameters

PARAMS = RatingParameters.default()


def _absence(
    impact: DirectImpact | DerivedImpact,
    status: AbsenceStatus = AbsenceStatus.OUT,
    position: PositionCategory = PositionCategory.OTHER,
    duration: DurationCategory = DurationCategory.D22_60,
    player_id: str = "p1",
) -> PlayerAbsence:
    return PlayerAbsence(
        player_id=player_id,
        impact=impact,
        status=status,
        position=position,
        duration=duration,
    )


def _transfer(
    effective_date: date,
    impact: float = 0.8,
    direction: TransferDirection = TransferDirection.IN,
    transfer_type: TransferType = TransferType.PERMANENT,
) -> TransferEvent:
    return TransferEvent(
        player_id="t1",
        impact=impact,
        direction=direction,
        transfer_type=transfer_type,
        effective_date=effective_date,
    )


def test_no_absences_is_exactly_zero() -> None:
    assert injury_adjustment([], PARAMS) == 0
    assert injury_adjustment((), PARAMS) == 0


def test_single_absence_closed_form() -> None:
    result = injury_adjustment([_absence(DirectImpact(0.7))], PARAMS)
    assert result == pytest.approx(-18.0 * 0.7 * 1.0 * 1.0 * 1.25)
    assert result == pytest.approx(-15.75)


def test_star_striker_out_for_a_month() -> None:
    result = injury_adjustment(
        [_absence(DirectImpact(0.7), position=PositionCategory.ST)],
        PARAMS,
    )
    assert result == pytest.approx(-17.01)


def test_multiple_absences_are_summed() -> None:
    absences = [
        _absence(DirectImpact(0.5), AbsenceStatus.OUT, PositionCategory.CB, DurationCategory.LT7, "p1"),
        _absence(
            DirectImpact(0.3),
            AbsenceStatus.DOUBTFUL,
            PositionCategory.DM,
            DurationCategory.D7_21,
            "p2",
        ),
        _absence(
            DirectImpact(0.8),
            AbsenceStatus.INJURED,
            PositionCategory.GK,
            DurationCategory.GT60,
            "p3",
        ),
    ]

    expected = -18.0 * (0.5 * 1.0 * 1.1 * 1.0 + 0.3 * 0.4 * 1.05 * 1.1 + 0.8 * 1.0 * 1.15 * 1.4)
    assert injury_adjustment(absences, PARAMS) == pytest.approx(expected)


def test_derived_impact_uses_minutes_share_and_value_tier() -> None:
    injuries = PARAMS.injuries
    assert player_impact(DerivedImpact(450, ValueTier.A), injuries) == pytest.approx(
        0.6 * 0.5 + 0.4 * 0.75
    )
    assert player_impact(DerivedImpact(2_000, ValueTier.S), injuries) == pytest.approx(1.0)
    assert player_impact(DerivedImpact(), injuries) == pytest.approx(0.4 * 0.35)


def test_direct_impact_ignores_derivation() -> None:
    assert player_impact(DirectImpact(0.42), PARAMS.injuries) == pytest.approx(0.42)


def test_derived_absence_feeds_injury_adjustment() -> None:
    absence = _absence(DerivedImpact(900, ValueTier.B), duration=DurationCategory.MISSING)
    expected = -18.0 * (0.6 * 1.0 + 0.4 * 0.55) * 1.0 * 1.0 * 1.1
    assert injury_adjustment([absence], PARAMS) == pytest.approx(expected)


def test_no_transfers_is_exactly_zero() -> None:
    assert transfer_adjustment([], date(2024, 6, 1), PARAMS) == 0


def test_transfer_on_effective_date_has_no_effect() -> None:
    day = date(2024, 6, 1)
    assert transfer_adjustment([_transfer(day)], day, PARAMS) == pytest.approx(0.0)


def test_transfer_halfway_through_ramp() -> None:
    effective = date(2024, 6, 1)
    result = transfer_adjustment([_transfer(effective)], date(2024, 6, 16), PARAMS)
    assert result == pytest.approx(22.0 * 0.8 * 0.5)


def test_transfer_fully_ramped() -> None:
    effective = date(2024, 6, 1)
    assert transfer_adjustment([_transfer(effective)], date(2024, 7, 1), PARAMS) == pytest.approx(
        22.0 * 0.8
    )
    assert transfer_adjustment([_transfer(effective)], date(2025, 1, 1), PARAMS) == pytest.approx(
        22.0 * 0.8
    )


def test_outgoing_transfer_is_negative() -> None:
    effective = date(2024, 6, 1)
    result = transfer_adjustment(
        [_transfer(effective, direction=TransferDirection.OUT)],
        date(2024, 7, 1),
        PARAMS,
    )
    assert result == pytest.approx(-22.0 * 0.8)


def test_loan_uses_its_own_time_constant() -> None:
    effective = date(2024, 6, 1)
    result = transfer_adjustment(
        [_transfer(effective, impact=0.5, transfer_type=TransferType.LOAN)],
        effective + timedelta(days=21),
        PARAMS,
    )
    assert result == pytest.approx(22.0 * 0.5)


def test_future_transfer_is_clamped_to_zero() -> None:
    assert transfer_ramp(date(2024, 6, 1), date(2024, 6, 10), 30.0) == 0.0


def test_incoming_and_outgoing_transfers_net_out() -> None:
    effective = date(2024, 6, 1)
    transfers = [
        _transfer(effective, impact=0.6),
        _transfer(effective, impact=0.6, direction=TransferDirection.OUT),
    ]
    assert transfer_adjustment(transfers, date(2024, 7, 15), PARAMS) == pytest.approx(0.0)


def test_no_manager_change_is_exactly_zero() -> None:
    assert manager_adjustment(None, date(2024, 6, 1), PARAMS) == 0


def test_manager_change_on_day_zero_is_full_tier_delta() -> None:
    change = ManagerChangeEvent(tier=ManagerTier.ELITE, change_date=date(2024, 6, 1))
    assert manager_adjustment(change, date(2024, 6, 1), PARAMS) == pytest.approx(20.0)


def test_manager_change_decays_with_time_constant() -> None:
    change = ManagerChangeEvent(tier=ManagerTier.ELITE, change_date=date(2024, 6, 1))
    after_45 = manager_adjustment(change, date(2024, 7, 16), PARAMS)
    after_90 = manager_adjustment(change, date(2024, 8, 30), PARAMS)

    assert after_45 == pytest.approx(20.0 * exp(-1.0))
    assert after_45 == pytest.approx(7.36, abs=0.01)
    assert after_90 == pytest.approx(20.0 * exp(-2.0))


def test_bad_manager_is_a_decaying_penalty() -> None:
    change = ManagerChangeEvent(tier=ManagerTier.BAD, change_date=date(2024, 6, 1))
    result = manager_adjustment(change, date(2024, 6, 11), PARAMS)
    assert result == pytest.approx(-15.0 * exp(-10.0 / 45.0))


def test_future_manager_change_is_clamped_to_change_day() -> None:
    change = ManagerChangeEvent(tier=ManagerTier.GOOD, change_date=date(2024, 6, 20))
    assert manager_adjustment(change, date(2024, 6, 1), PARAMS) == pytest.approx(10.0)


def test_fatigue_short_rest() -> None:
    assert fatigue_adjustment(2, 0, PARAMS) == pytest.approx(-4.0)


def test_fatigue_congested_schedule() -> None:
    assert fatigue_adjustment(10, 5, PARAMS) == pytest.approx(-3.0)


def test_fatigue_both_terms() -> None:
    assert fatigue_adjustment(1, 6, PARAMS) == pytest.approx(-2.0 * 3 - 3.0 * 2)


def test_no_fatigue_at_thresholds() -> None:
    assert fatigue_adjustment(4, 4, PARAMS) == 0
    assert fatigue_adjustment(5, 2, PARAMS) == 0


def test_fatigue_thresholds_come_from_parameters() -> None:
    params = replace(
        PARAMS,
        fatigue=FatigueParameters(phi=2.0, psi=3.0, rest_days_threshold=3, matches_threshold=2),
    )
    assert fatigue_adjustment(2, 3, params) == pytest.approx(-2.0 - 3.0)


@pytest.mark.parametrize("value", [-0.01, 1.2])
def test_direct_impact_outside_unit_interval_is_rejected(value: float) -> None:
    with pytest.raises(ValueError, match="impact value must be in \\[0, 1\\]"):
        DirectImpact(value)


def test_transfer_impact_outside_unit_interval_is_rejected() -> None:
    with pytest.raises(ValueError, match="transfer impact for 't1' must be in \\[0, 1\\]"):
        _transfer(date(2024, 9, 1), impact=-0.1)
