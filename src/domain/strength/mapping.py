"""Logistic mapping between raw ratings and the bounded display scale."""

from __future__ import annotations

from math import exp, log

from domain.strength.parameters import RatingParameters


def _sigmoid(value: float) -> float:
    # Split on sign so exp() never overflows for extreme ratings.
    if value >= 0.0:
        return 1.0 / (1.0 + exp(-value))
    z = exp(value)
    return z / (1.0 + z)


def to_display(raw: float, params: RatingParameters) -> float:
    """Map an unbounded raw rating into [display_min, display_max]."""
    mapping = params.mapping
    share = _sigmoid((raw - mapping.mu) / mapping.sigma)
    return mapping.display_min + (mapping.display_max - mapping.display_min) * share


def to_raw(display: float, params: RatingParameters) -> float:
    """Invert ``to_display``; display must lie strictly inside the bounds."""
    mapping = params.mapping
    if not mapping.display_min < display < mapping.display_max:
        raise ValueError(
            f"display={display} must be strictly between "
            f"{mapping.display_min} and {mapping.display_max}"
        )
    share = (display - mapping.display_min) / (mapping.display_max - mapping.display_min)
    return mapping.mu + mapping.sigma * log(share / (1.0 - share))
