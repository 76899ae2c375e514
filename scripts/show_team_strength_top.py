#!/usr/bin/env python3
"""Show top teams for a stored team-strength system with recent form."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from repositories.team_strength_repository import fetch_team_strength_summaries

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Query top teams from team_strength_events by system.",
)


@app.command()
def show_team_strength_top(
    system_name: Annotated[
        str,
        typer.Option("--system-name", help="Team strength system name from the [system] table."),
    ] = "team_strength_default",
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of teams to return."),
    ] = 10,
    db_url: Annotated[
        str,
        typer.Option(
            "--db-url",
            help="Database URL. Defaults to the local team_strength postgres instance.",
        ),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print top teams by latest base rating, with display score and last-5 form."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    engine = create_db_engine(db_url)
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        summaries = fetch_team_strength_summaries(session, system_name, top_n=top_n)

    if not summaries:
        typer.echo(f"No rows found for system '{system_name}'.")
        return

    typer.echo(f"system={system_name} top_n={top_n}")
    for summary in summaries:
        typer.echo(
            f"{summary.rank:2d}. team_id={summary.team_id:<8d} "
            f"raw={summary.post_rating:8.2f} display={summary.display_score:6.0f} "
            f"matches={summary.matches_processed:4d} "
            f"last5={''.join(summary.last_results):<5} form={summary.form:.2f} "
            f"last_match={summary.last_match_date.isoformat()}"
        )


if __name__ == "__main__":
    app()
