"""Rating-system domain modules."""

from domain.strength.common import MatchObservation, RatingBreakdown, TeamSnapshot

__all__ = ["MatchObservation", "RatingBreakdown", "TeamSnapshot"]
