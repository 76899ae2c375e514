"""Shared value objects and categories for team-strength calculations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class CompetitionType(StrEnum):
    LEAGUE = "league"
    UCL = "ucl"
    UEL = "uel"
    UECL = "uecl"
    DOMESTIC_CUP = "domestic_cup"
    SUPERCUP = "supercup"


class AbsenceStatus(StrEnum):
    OUT = "out"
    INJURED = "injured"
    SUSPENDED = "suspended"
    DOUBTFUL = "doubtful"
    QUESTIONABLE = "questionable"
    PROBABLE = "probable"
    UNKNOWN = "unknown"


class PositionCategory(StrEnum):
    GK = "GK"
    CB = "CB"
    DM = "DM"
    ST = "ST"
    OTHER = "other"


class DurationCategory(StrEnum):
    LT7 = "lt7"
    D7_21 = "d7_21"
    D22_60 = "d22_60"
    GT60 = "gt60"
    MISSING = "missing"


class ValueTier(StrEnum):
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    MISSING = "missing"


class ManagerTier(StrEnum):
    ELITE = "elite"
    GOOD = "good"
    NEUTRAL = "neutral"
    RISKY = "risky"
    BAD = "bad"


class TransferType(StrEnum):
    PERMANENT = "permanent"
    LOAN = "loan"


class TransferDirection(StrEnum):
    IN = "in"
    OUT = "out"


@dataclass(frozen=True)
class MatchObservation:
    """One finished match between two rated teams."""

    home_rating: float
    away_rating: float
    home_goals: int
    away_goals: int
    competition: CompetitionType
    neutral_venue: bool = False


@dataclass(frozen=True)
class MatchOutcome:
    home_rating: float
    away_rating: float
    home_delta: float
    away_delta: float
    home_expected: float
    away_expected: float


@dataclass(frozen=True)
class DirectImpact:
    """Player impact supplied directly by the caller, in [0, 1]."""

    value: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"impact value must be in [0, 1], got {self.value}")


@dataclass(frozen=True)
class DerivedImpact:
    """Player impact derived from season minutes and market-value tier."""

    minutes_played: int = 0
    value_tier: ValueTier = ValueTier.MISSING


PlayerImpact = DirectImpact | DerivedImpact


@dataclass(frozen=True)
class PlayerAbsence:
    player_id: str
    impact: PlayerImpact
    status: AbsenceStatus
    position: PositionCategory
    duration: DurationCategory


@dataclass(frozen=True)
class TransferEvent:
    player_id: str
    impact: float
    direction: TransferDirection
    transfer_type: TransferType
    effective_date: date

    def __post_init__(self) -> None:
        if not 0.0 <= self.impact <= 1.0:
            raise ValueError(
                f"transfer impact for {self.player_id!r} must be in [0, 1], got {self.impact}"
            )


@dataclass(frozen=True)
class ManagerChangeEvent:
    tier: ManagerTier
    change_date: date


@dataclass(frozen=True)
class TeamSnapshot:
    """Everything known about one team on one as-of date."""

    base_rating: float
    as_of_date: date
    rest_days: int
    matches_in_14_days: int
    absences: tuple[PlayerAbsence, ...] = ()
    transfers: tuple[TransferEvent, ...] = ()
    manager_change: ManagerChangeEvent | None = None


@dataclass(frozen=True)
class RatingBreakdown:
    """Itemized rating for one team; total_raw is the sum of the five components."""

    base_rating: float
    injury_adjustment: float
    transfer_adjustment: float
    manager_adjustment: float
    fatigue_adjustment: float
    total_raw: float
    display_score: float

    def as_dict(self) -> dict[str, float]:
        return {
            "base_rating": self.base_rating,
            "injury_adjustment": self.injury_adjustment,
            "transfer_adjustment": self.transfer_adjustment,
            "manager_adjustment": self.manager_adjustment,
            "fatigue_adjustment": self.fatigue_adjustment,
            "total_raw": self.total_raw,
            "display_score": self.display_score,
        }


@dataclass(frozen=True)
class ValueTierBracket:
    """Lower bound (inclusive, EUR millions) for a market-value tier."""

    tier: ValueTier
    min_value_m: float = 0.0
