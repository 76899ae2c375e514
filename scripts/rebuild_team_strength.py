#!/usr/bin/env python3
"""Rebuild team-strength base ratings and inspect rating breakdowns."""

from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.strength import (
    ManagerChangeEvent,
    ManagerTier,
    TeamRatingEvent,
    TeamSnapshot,
    TeamStrengthReplay,
    compute_rating,
    find_strength_system_config,
)
from repositories.team_strength_repository import (
    count_tracked_teams,
    delete_team_strength_events,
    ensure_team_strength_schema,
    fetch_match_records,
    insert_team_strength_events,
)

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "team_strength"
DEFAULT_SYSTEM_NAME = "team_strength_default"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Team strength jobs.",
)


def _flush_batch(batch: list[TeamRatingEvent]) -> list[TeamRatingEvent]:
    payload = batch[:]
    batch.clear()
    return payload


@app.command("rebuild")
def rebuild_team_strength(
    db_url: Annotated[
        str,
        typer.Option(
            "--db-url",
            help="Database URL. Defaults to the local team_strength postgres instance.",
        ),
    ] = DEFAULT_DB_URL,
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of team strength TOML configs."),
    ] = DEFAULT_CONFIG_DIR,
    system_name: Annotated[str, typer.Option("--system-name")] = DEFAULT_SYSTEM_NAME,
    initial_rating: Annotated[float, typer.Option("--initial-rating")] = 1500.0,
    batch_size: Annotated[
        int,
        typer.Option("--batch-size", help="Batch size for inserting rating events."),
    ] = 5000,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute ratings without writing to the database."),
    ] = False,
) -> None:
    """Recompute base ratings from stored matches in chronological order."""
    if batch_size <= 0:
        raise typer.BadParameter("--batch-size must be greater than 0")

    try:
        system = find_strength_system_config(config_dir, system_name)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    engine = create_db_engine(db_url)
    ensure_team_strength_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        match_records = fetch_match_records(session)
    total_matches = len(match_records)
    replay = TeamStrengthReplay(system.parameters, initial_rating=initial_rating)

    if dry_run:
        replay.process_matches(match_records)
        typer.echo(
            f"[dry-run] system={system.name} processed_matches={total_matches} "
            f"skipped_matches={replay.skipped_matches} "
            f"tracked_teams={replay.tracked_team_count()}"
        )
        return

    inserted_events = 0
    buffered_events: list[TeamRatingEvent] = []
    with session_factory() as session:
        with session.begin():
            delete_team_strength_events(session, system.name)

            for index, record in enumerate(match_records, start=1):
                result = replay.process_match(record)
                if result is not None:
                    buffered_events.extend(result)

                if len(buffered_events) >= batch_size:
                    payload = _flush_batch(buffered_events)
                    insert_team_strength_events(session, system.name, payload)
                    inserted_events += len(payload)

                if index % 10_000 == 0:
                    typer.echo(f"processed_matches={index}/{total_matches}")

            if buffered_events:
                payload = _flush_batch(buffered_events)
                insert_team_strength_events(session, system.name, payload)
                inserted_events += len(payload)

        tracked_teams = count_tracked_teams(session, system.name)
        typer.echo(
            "completed "
            f"system={system.name} "
            f"processed_matches={total_matches} "
            f"skipped_matches={replay.skipped_matches} "
            f"inserted_events={inserted_events} "
            f"tracked_teams={tracked_teams}"
        )


@app.command("breakdown")
def show_breakdown(
    base_rating: Annotated[float, typer.Option("--base-rating")],
    rest_days: Annotated[int, typer.Option("--rest-days")] = 7,
    matches_in_14_days: Annotated[int, typer.Option("--matches-in-14-days")] = 2,
    manager_tier: Annotated[
        str | None,
        typer.Option("--manager-tier", help="Tier of a recently appointed manager."),
    ] = None,
    manager_change_date: Annotated[
        datetime | None,
        typer.Option("--manager-change-date", formats=["%Y-%m-%d"]),
    ] = None,
    as_of: Annotated[
        datetime | None,
        typer.Option("--as-of", formats=["%Y-%m-%d"], help="Defaults to today."),
    ] = None,
    config_dir: Annotated[Path, typer.Option("--config-dir")] = DEFAULT_CONFIG_DIR,
    system_name: Annotated[str, typer.Option("--system-name")] = DEFAULT_SYSTEM_NAME,
) -> None:
    """Print every component of one team's rating."""
    if rest_days < 0:
        raise typer.BadParameter("--rest-days must be >= 0")
    if matches_in_14_days < 0:
        raise typer.BadParameter("--matches-in-14-days must be >= 0")
    if (manager_tier is None) != (manager_change_date is None):
        raise typer.BadParameter("--manager-tier and --manager-change-date go together")

    try:
        system = find_strength_system_config(config_dir, system_name)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    manager_change = None
    if manager_tier is not None and manager_change_date is not None:
        try:
            tier = ManagerTier(manager_tier)
        except ValueError as exc:
            raise typer.BadParameter(f"unknown manager tier {manager_tier!r}") from exc
        manager_change = ManagerChangeEvent(tier=tier, change_date=manager_change_date.date())

    as_of_date = as_of.date() if as_of is not None else date.today()
    breakdown = compute_rating(
        TeamSnapshot(
            base_rating=base_rating,
            as_of_date=as_of_date,
            rest_days=rest_days,
            matches_in_14_days=matches_in_14_days,
            manager_change=manager_change,
        ),
        system.parameters,
    )

    typer.echo(f"system={system.name} as_of={as_of_date.isoformat()}")
    for name, value in breakdown.as_dict().items():
        typer.echo(f"{name:<20} {value:>10.2f}")


if __name__ == "__main__":
    app()
