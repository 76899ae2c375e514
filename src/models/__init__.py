"""ORM models."""

from models.base import Base
from models.team_strength import TeamStrengthEvent

__all__ = ["Base", "TeamStrengthEvent"]
