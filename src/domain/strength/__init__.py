"""Team-strength rating modules."""

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
    CompetitionType,
    DerivedImpact,
    DirectImpact,
    DurationCategory,
    ManagerChangeEvent,
    ManagerTier,
    MatchObservation,
    MatchOutcome,
    PlayerAbsence,
    PlayerImpact,
    PositionCategory,
    RatingBreakdown,
    TeamSnapshot,
    TransferDirection,
    TransferEvent,
    TransferType,
    ValueTier,
    ValueTierBracket,
)
from domain.strength.config import (
    StrengthSystemConfig,
    find_strength_system_config,
    load_strength_system_configs,
)
from domain.strength.engine import compute_rating
from domain.strength.mapping import to_display, to_raw
from domain.strength.match_calculator import calculate_expected_score, update_rating
from domain.strength.parameters import (
    FatigueParameters,
    InjuryParameters,
    ManagerParameters,
    MappingParameters,
    MarginParameters,
    MatchParameters,
    RatingParameters,
    TransferParameters,
    value_tier_for_market_value,
)
from domain.strength.replay import MatchRecord, TeamRatingEvent, TeamStrengthReplay

__all__ = [
    "AbsenceStatus",
    "CompetitionType",
    "DerivedImpact",
    "DirectImpact",
    "DurationCategory",
    "FatigueParameters",
    "InjuryParameters",
    "ManagerChangeEvent",
    "ManagerParameters",
    "ManagerTier",
    "MappingParameters",
    "MarginParameters",
    "MatchObservation",
    "MatchOutcome",
    "MatchParameters",
    "MatchRecord",
    "PlayerAbsence",
    "PlayerImpact",
    "PositionCategory",
    "RatingBreakdown",
    "RatingParameters",
    "StrengthSystemConfig",
    "TeamRatingEvent",
    "TeamSnapshot",
    "TeamStrengthReplay",
    "TransferDirection",
    "TransferEvent",
    "TransferParameters",
    "TransferType",
    "ValueTier",
    "ValueTierBracket",
    "calculate_expected_score",
    "compute_rating",
    "fatigue_adjustment",
    "find_strength_system_config",
    "injury_adjustment",
    "load_strength_system_configs",
    "manager_adjustment",
    "player_impact",
    "to_display",
    "to_raw",
    "transfer_adjustment",
    "transfer_ramp",
    "update_rating",
    "value_tier_for_market_value",
]
