"""Load team-strength parameter sets from TOML files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import (
    BaseSystemConfig,
    find_system_config,
    load_system_configs,
    read_int,
    require_table,
)
from domain.strength.common import ValueTier, ValueTierBracket
from domain.strength.parameters import (
    FatigueParameters,
    InjuryParameters,
    ManagerParameters,
    MappingParameters,
    MarginParameters,
    MatchParameters,
    RatingParameters,
    TransferParameters,
)


@dataclass(frozen=True)
class StrengthSystemConfig(BaseSystemConfig):
    """Configuration for one team-strength system."""

    parameters: RatingParameters

    def as_config_json(self) -> dict[str, Any]:
        params = self.parameters
        return {
            "match": {
                "k_base": params.match.k_base,
                "home_advantage": params.match.home_advantage,
                "scale_factor": params.match.scale_factor,
                "competition_weights": _plain(params.match.competition_weights),
                "margin": {
                    "enabled": params.match.margin.enabled,
                    "alpha": params.match.margin.alpha,
                    "cap_goals": params.match.margin.cap_goals,
                },
            },
            "injuries": {
                "beta": params.injuries.beta,
                "minutes_reference": params.injuries.minutes_reference,
                "minutes_share_weight": params.injuries.minutes_share_weight,
                "value_tier_weight": params.injuries.value_tier_weight,
                "status_weights": _plain(params.injuries.status_weights),
                "position_weights": _plain(params.injuries.position_weights),
                "duration_weights": _plain(params.injuries.duration_weights),
                "value_tier_scores": _plain(params.injuries.value_tier_scores),
                "value_tier_brackets": {
                    bracket.tier.value: bracket.min_value_m
                    for bracket in params.injuries.value_tier_brackets
                },
            },
            "transfers": {
                "gamma": params.transfers.gamma,
                "tau_days": _plain(params.transfers.tau_days),
            },
            "manager": {
                "lambda_days": params.manager.lambda_days,
                "tier_deltas": _plain(params.manager.tier_deltas),
            },
            "fatigue": {
                "phi": params.fatigue.phi,
                "psi": params.fatigue.psi,
                "rest_days_threshold": params.fatigue.rest_days_threshold,
                "matches_threshold": params.fatigue.matches_threshold,
            },
            "mapping": {
                "mu": params.mapping.mu,
                "sigma": params.mapping.sigma,
                "display_min": params.mapping.display_min,
                "display_max": params.mapping.display_max,
            },
        }


def _plain(weights: Mapping[Any, float]) -> dict[str, float]:
    return {str(key): value for key, value in weights.items()}


def load_strength_system_configs(config_dir: Path) -> list[StrengthSystemConfig]:
    """Load and validate all team-strength TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_strength_system_config,
        duplicate_name_label="team strength",
    )


def find_strength_system_config(config_dir: Path, name: str) -> StrengthSystemConfig:
    return find_system_config(
        load_strength_system_configs(config_dir),
        name,
        label="team strength",
        config_dir=config_dir,
    )


def _parse_strength_system_config(
    raw: dict[str, Any],
    name: str,
    description: str | None,
    file_path: Path,
) -> StrengthSystemConfig:
    match_raw = raw.get("match", {})
    injuries_raw = raw.get("injuries", {})
    transfers_raw = raw.get("transfers", {})
    manager_raw = raw.get("manager", {})
    fatigue_raw = raw.get("fatigue", {})
    mapping_raw = raw.get("mapping", {})
    margin_raw = match_raw.get("margin", {})

    parameters = RatingParameters(
        match=MatchParameters(
            competition_weights=require_table(match_raw, "competition_weights", section="match"),
            k_base=float(match_raw.get("k_base", 24.0)),
            home_advantage=float(match_raw.get("home_advantage", 60.0)),
            scale_factor=float(match_raw.get("scale_factor", 400.0)),
            margin=MarginParameters(
                enabled=bool(margin_raw.get("enabled", True)),
                alpha=float(margin_raw.get("alpha", 1.0)),
                cap_goals=read_int(margin_raw, "cap_goals", 2, section="match.margin"),
            ),
        ),
        injuries=InjuryParameters(
            status_weights=require_table(injuries_raw, "status_weights", section="injuries"),
            position_weights=require_table(injuries_raw, "position_weights", section="injuries"),
            duration_weights=require_table(injuries_raw, "duration_weights", section="injuries"),
            value_tier_scores=require_table(injuries_raw, "value_tier_scores", section="injuries"),
            value_tier_brackets=_parse_brackets(
                require_table(injuries_raw, "value_tier_brackets", section="injuries")
            ),
            beta=float(injuries_raw.get("beta", 18.0)),
            minutes_reference=float(injuries_raw.get("minutes_reference", 900.0)),
            minutes_share_weight=float(injuries_raw.get("minutes_share_weight", 0.6)),
            value_tier_weight=float(injuries_raw.get("value_tier_weight", 0.4)),
        ),
        transfers=TransferParameters(
            tau_days=require_table(transfers_raw, "tau_days", section="transfers"),
            gamma=float(transfers_raw.get("gamma", 22.0)),
        ),
        manager=ManagerParameters(
            tier_deltas=require_table(manager_raw, "tier_deltas", section="manager"),
            lambda_days=float(manager_raw.get("lambda_days", 45.0)),
        ),
        fatigue=FatigueParameters(
            phi=float(fatigue_raw.get("phi", 2.0)),
            psi=float(fatigue_raw.get("psi", 3.0)),
            rest_days_threshold=read_int(fatigue_raw, "rest_days_threshold", 4, section="fatigue"),
            matches_threshold=read_int(fatigue_raw, "matches_threshold", 4, section="fatigue"),
        ),
        mapping=MappingParameters(
            mu=float(mapping_raw.get("mu", 1850.0)),
            sigma=float(mapping_raw.get("sigma", 120.0)),
            display_min=float(mapping_raw.get("display_min", 10.0)),
            display_max=float(mapping_raw.get("display_max", 1000.0)),
        ),
    )

    return StrengthSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _parse_brackets(raw: dict[str, Any]) -> tuple[ValueTierBracket, ...]:
    brackets: list[ValueTierBracket] = []
    for tier_name, min_value in raw.items():
        try:
            tier = ValueTier(tier_name)
        except ValueError as exc:
            raise ValueError(
                f"[injuries.value_tier_brackets] unknown tier {tier_name!r}"
            ) from exc
        brackets.append(ValueTierBracket(tier=tier, min_value_m=float(min_value)))
    return tuple(brackets)
