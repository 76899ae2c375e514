"""team_strength_events table model."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class TeamStrengthEvent(Base):
    """Historical base-rating events (one row per team per match)."""

    __tablename__ = "team_strength_events"
    __table_args__ = (
        UniqueConstraint("system_name", "team_id", "match_id", name="uq_team_strength_team_match"),
        CheckConstraint(
            "actual_score IN (0.0, 0.5, 1.0)",
            name="ck_team_strength_actual_score",
        ),
        CheckConstraint(
            "expected_score >= 0.0 AND expected_score <= 1.0",
            name="ck_team_strength_expected_score",
        ),
        Index("idx_team_strength_team_date", "system_name", "team_id", "match_date", "match_id"),
        Index("idx_team_strength_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    system_name: Mapped[str] = mapped_column(String(128), nullable=False)
    team_id: Mapped[int] = mapped_column(Integer, nullable=False)
    opponent_team_id: Mapped[int] = mapped_column(Integer, nullable=False)
    match_id: Mapped[int] = mapped_column(Integer, nullable=False)
    match_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_home: Mapped[bool] = mapped_column(Boolean, nullable=False)
    goals_for: Mapped[int] = mapped_column(Integer, nullable=False)
    goals_against: Mapped[int] = mapped_column(Integer, nullable=False)
    actual_score: Mapped[float] = mapped_column(Float, nullable=False)
    expected_score: Mapped[float] = mapped_column(Float, nullable=False)
    pre_rating: Mapped[float] = mapped_column(Float, nullable=False)
    rating_delta: Mapped[float] = mapped_column(Float, nullable=False)
    post_rating: Mapped[float] = mapped_column(Float, nullable=False)
    display_score: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
