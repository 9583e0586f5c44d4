from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import NoReturn, Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_dashboard
from logging_config import configure_logging
from models.records import DashboardState
from services.dashboard import DashboardService
from services.errors import ReadingFormatError, TelemetryFetchError
from services.normalizer import normalize_payload
from services.projections import project_dashboard
from services.telemetry_client import TelemetryClient


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Terminal views of the remote temperature dashboard.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Telemetry endpoint (defaults to TELEMETRY_API_URL env or the built-in tunnel URL).",
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        help="Seconds between refreshes when watching.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    ctx.obj = CLIState(config=load_config(url=url, interval=interval, timeout=timeout))


async def _fetch_state(config: CLIConfig) -> DashboardState:
    client = TelemetryClient(config.url, timeout=config.timeout)
    try:
        payload = await client.fetch()
    finally:
        await client.aclose()
    return normalize_payload(payload)


@app.command("snapshot")
def snapshot_command(ctx: typer.Context) -> None:
    """Fetch the readings once and print the three tables."""
    state = _get_state(ctx)
    try:
        dashboard_state = asyncio.run(_fetch_state(state.config))
    except TelemetryFetchError as exc:
        _fail(str(exc))

    try:
        view = project_dashboard(dashboard_state, state.config.tz)
    except ReadingFormatError as exc:
        _fail(str(exc))
    render_dashboard(view)


async def _watch(config: CLIConfig, cycles: int) -> None:
    client = TelemetryClient(config.url, timeout=config.timeout)
    service = DashboardService(client, interval=config.interval, tz=config.tz)
    finished = asyncio.Event()

    def show(_state: DashboardState) -> None:
        typer.echo()
        typer.secho(f"Refresh #{service.store.revision}", fg=typer.colors.GREEN)
        render_dashboard(service.view)
        if cycles and service.store.revision >= cycles:
            finished.set()

    service.store.subscribe(show)
    service.start()
    try:
        await finished.wait()
    finally:
        await service.shutdown()


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    cycles: int = typer.Option(
        0,
        "--cycles",
        "-n",
        min=0,
        help="Stop after this many successful refreshes (0 keeps watching).",
    ),
) -> None:
    """Poll the endpoint and reprint the tables after every refresh."""
    state = _get_state(ctx)
    typer.echo(
        f"Watching {state.config.url} every {state.config.interval}s (Ctrl+C to stop)..."
    )
    try:
        asyncio.run(_watch(state.config, cycles))
    except KeyboardInterrupt:
        typer.echo("Stopped.")
