from __future__ import annotations

from typing import Iterable

import typer

from services.projections import DashboardView, TableRow

_TEMPERATURE_COLORS = {
    "history": typer.colors.YELLOW,
    "highest": typer.colors.RED,
    "lowest": typer.colors.BLUE,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_rows(rows: Iterable[TableRow], kind: str) -> None:
    rows = list(rows)
    if not rows:
        typer.echo("  No readings.")
        return
    typer.echo(f"  {'Temperature (°C)':>16}  Date and Time")
    for row in rows:
        temperature = typer.style(
            f"{row.temperature:>16}", fg=_TEMPERATURE_COLORS[kind], bold=True
        )
        # Odd rows are dimmed to mimic the table banding of the web page.
        recorded_at = typer.style(row.recorded_at, dim=row.band == "odd")
        typer.echo(f"  {temperature}  {recorded_at}")


def render_dashboard(view: DashboardView) -> None:
    echo_heading("Reading History")
    echo_rows(view.history, "history")
    typer.echo()
    echo_heading("Top 5 Highest Temperatures")
    echo_rows(view.highest, "highest")
    typer.echo()
    echo_heading("Top 5 Lowest Temperatures")
    echo_rows(view.lowest, "lowest")
