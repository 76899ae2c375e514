"""Immutable parameter set for the team-strength engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TypeVar

from domain.strength.common import (
    AbsenceStatus,
    CompetitionType,
    DurationCategory,
    ManagerTier,
    PositionCategory,
    TransferType,
    ValueTier,
    ValueTierBracket,
)

E = TypeVar("E", bound=StrEnum)


def _freeze_weights(
    weights: Mapping[E, float] | Mapping[str, float],
    category: type[E],
    *,
    label: str,
) -> Mapping[E, float]:
    """Coerce keys to ``category`` and require a weight for every member."""
    frozen: dict[E, float] = {}
    for key, value in weights.items():
        try:
            member = category(key)
        except ValueError as exc:
            raise ValueError(f"{label}: unknown category {key!r}") from exc
        frozen[member] = float(value)

    missing = [member.value for member in category if member not in frozen]
    if missing:
        raise ValueError(f"{label}: missing weights for {missing}")
    return MappingProxyType(frozen)


def _set_weights(instance: object, name: str, category: type[StrEnum], *, label: str) -> None:
    frozen = _freeze_weights(getattr(instance, name), category, label=label)
    object.__setattr__(instance, name, frozen)


@dataclass(frozen=True)
class MarginParameters:
    enabled: bool = True
    alpha: float = 1.0
    cap_goals: int = 2

    def __post_init__(self) -> None:
        if self.cap_goals < 0:
            raise ValueError("margin.cap_goals must be >= 0")


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class MatchParameters:
    """Constants for the post-match rating update.

    ``scale_factor`` is the divisor of the base-10 logistic expectation. The
    conventional 400 means a 400-point gap gives 10:1 odds; changing it
    rescales how strongly rating gaps translate into expected scores and
    therefore the effective sensitivity of ``k_base``.
    """

    competition_weights: Mapping[CompetitionType, float]
    k_base: float = 24.0
    home_advantage: float = 60.0
    scale_factor: float = 400.0
    margin: MarginParameters = field(default_factory=MarginParameters)

    # Weight tables are read-only mappings, which cannot be hashed.
    __hash__ = None

    def __post_init__(self) -> None:
        if self.k_base <= 0.0:
            raise ValueError("match.k_base must be > 0")
        if self.scale_factor <= 0.0:
            raise ValueError("match.scale_factor must be > 0")
        _set_weights(self, "competition_weights", CompetitionType, label="match.competition_weights")


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class InjuryParameters:
    status_weights: Mapping[AbsenceStatus, float]
    position_weights: Mapping[PositionCategory, float]
    duration_weights: Mapping[DurationCategory, float]
    value_tier_scores: Mapping[ValueTier, float]
    value_tier_brackets: tuple[ValueTierBracket, ...]
    beta: float = 18.0
    minutes_reference: float = 900.0
    minutes_share_weight: float = 0.6
    value_tier_weight: float = 0.4

    __hash__ = None

    def __post_init__(self) -> None:
        if self.minutes_reference <= 0.0:
            raise ValueError("injuries.minutes_reference must be > 0")
        _set_weights(self, "status_weights", AbsenceStatus, label="injuries.status_weights")
        _set_weights(self, "position_weights", PositionCategory, label="injuries.position_weights")
        _set_weights(self, "duration_weights", DurationCategory, label="injuries.duration_weights")
        _set_weights(self, "value_tier_scores", ValueTier, label="injuries.value_tier_scores")
        object.__setattr__(
            self, "value_tier_brackets", _check_brackets(self.value_tier_brackets)
        )


def _check_brackets(brackets: tuple[ValueTierBracket, ...]) -> tuple[ValueTierBracket, ...]:
    """Require one bracket per priced tier, lowest starting at 0, highest first."""
    label = "injuries.value_tier_brackets"
    seen: set[ValueTier] = set()
    for bracket in brackets:
        if bracket.tier == ValueTier.MISSING:
            raise ValueError(f"{label}: {ValueTier.MISSING.value!r} cannot have a bracket")
        if bracket.tier in seen:
            raise ValueError(f"{label}: duplicate bracket for {bracket.tier.value!r}")
        if bracket.min_value_m < 0.0:
            raise ValueError(f"{label}.{bracket.tier.value} must be >= 0")
        seen.add(bracket.tier)

    missing = [tier.value for tier in ValueTier if tier != ValueTier.MISSING and tier not in seen]
    if missing:
        raise ValueError(f"{label}: missing brackets for {missing}")
    if min(bracket.min_value_m for bracket in brackets) != 0.0:
        raise ValueError(f"{label}: lowest bracket must start at 0")
    return tuple(sorted(brackets, key=lambda item: item.min_value_m, reverse=True))


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class TransferParameters:
    tau_days: Mapping[TransferType, float]
    gamma: float = 22.0

    __hash__ = None

    def __post_init__(self) -> None:
        _set_weights(self, "tau_days", TransferType, label="transfers.tau_days")
        for transfer_type, tau in self.tau_days.items():
            if tau <= 0.0:
                raise ValueError(f"transfers.tau_days.{transfer_type} must be > 0")


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class ManagerParameters:
    tier_deltas: Mapping[ManagerTier, float]
    lambda_days: float = 45.0

    __hash__ = None

    def __post_init__(self) -> None:
        if self.lambda_days <= 0.0:
            raise ValueError("manager.lambda_days must be > 0")
        _set_weights(self, "tier_deltas", ManagerTier, label="manager.tier_deltas")


@dataclass(frozen=True)
class FatigueParameters:
    phi: float = 2.0
    psi: float = 3.0
    rest_days_threshold: int = 4
    matches_threshold: int = 4


@dataclass(frozen=True)
class MappingParameters:
    mu: float = 1850.0
    sigma: float = 120.0
    display_min: float = 10.0
    display_max: float = 1000.0

    def __post_init__(self) -> None:
        if self.sigma <= 0.0:
            raise ValueError("mapping.sigma must be > 0")
        if self.display_min >= self.display_max:
            raise ValueError("mapping.display_min must be < mapping.display_max")


@dataclass(frozen=True, eq=True, unsafe_hash=False)
class RatingParameters:
    match: MatchParameters
    injuries: InjuryParameters
    transfers: TransferParameters
    manager: ManagerParameters
    fatigue: FatigueParameters
    mapping: MappingParameters

    __hash__ = None

    @classmethod
    def default(cls) -> RatingParameters:
        """Reference parameter set used by the production config."""
        return cls(
            match=MatchParameters(
                competition_weights={
                    CompetitionType.LEAGUE: 1.0,
                    CompetitionType.UCL: 1.2,
                    CompetitionType.UEL: 1.1,
                    CompetitionType.UECL: 1.05,
                    CompetitionType.DOMESTIC_CUP: 0.9,
                    CompetitionType.SUPERCUP: 0.8,
                },
            ),
            injuries=InjuryParameters(
                status_weights={
                    AbsenceStatus.OUT: 1.0,
                    AbsenceStatus.INJURED: 1.0,
                    AbsenceStatus.SUSPENDED: 1.0,
                    AbsenceStatus.DOUBTFUL: 0.4,
                    AbsenceStatus.QUESTIONABLE: 0.5,
                    AbsenceStatus.PROBABLE: 0.15,
                    AbsenceStatus.UNKNOWN: 0.5,
                },
                position_weights={
                    PositionCategory.GK: 1.15,
                    PositionCategory.CB: 1.10,
                    PositionCategory.DM: 1.05,
                    PositionCategory.ST: 1.08,
                    PositionCategory.OTHER: 1.0,
                },
                duration_weights={
                    DurationCategory.LT7: 1.0,
                    DurationCategory.D7_21: 1.1,
                    DurationCategory.D22_60: 1.25,
                    DurationCategory.GT60: 1.4,
                    DurationCategory.MISSING: 1.1,
                },
                value_tier_scores={
                    ValueTier.S: 1.0,
                    ValueTier.A: 0.75,
                    ValueTier.B: 0.55,
                    ValueTier.C: 0.35,
                    ValueTier.D: 0.20,
                    ValueTier.MISSING: 0.35,
                },
                value_tier_brackets=(
                    ValueTierBracket(ValueTier.S, 80.0),
                    ValueTierBracket(ValueTier.A, 40.0),
                    ValueTierBracket(ValueTier.B, 20.0),
                    ValueTierBracket(ValueTier.C, 8.0),
                    ValueTierBracket(ValueTier.D, 0.0),
                ),
            ),
            transfers=TransferParameters(
                tau_days={TransferType.PERMANENT: 30.0, TransferType.LOAN: 21.0},
            ),
            manager=ManagerParameters(
                tier_deltas={
                    ManagerTier.ELITE: 20.0,
                    ManagerTier.GOOD: 10.0,
                    ManagerTier.NEUTRAL: 0.0,
                    ManagerTier.RISKY: -8.0,
                    ManagerTier.BAD: -15.0,
                },
            ),
            fatigue=FatigueParameters(),
            mapping=MappingParameters(),
        )


def value_tier_for_market_value(
    market_value_m: float | None,
    brackets: tuple[ValueTierBracket, ...],
) -> ValueTier:
    """Map a market value (EUR millions) onto its configured tier."""
    if market_value_m is None:
        return ValueTier.MISSING
    for bracket in sorted(brackets, key=lambda item: item.min_value_m, reverse=True):
        if market_value_m >= bracket.min_value_m:
            return bracket.tier
    return ValueTier.MISSING
