from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import typer
import uvicorn

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_load_average


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for running and querying the load average service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Fetch and display the current load averages."""
    state = _get_state(ctx)
    payload = state.client.get_load_average()
    render_load_average(payload)


@app.command("watch")
def watch_command(
    ctx: typer.Context,
    interval: float = typer.Option(5.0, "--interval", min=0.0, help="Seconds between samples."),
    count: int = typer.Option(3, "--count", min=1, help="Number of samples to take."),
) -> None:
    """Sample the load averages repeatedly."""
    state = _get_state(ctx)
    for index in range(count):
        if index:
            time.sleep(interval)
            typer.echo()
        render_load_average(state.client.get_load_average())


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", help="Port to listen on."),
) -> None:
    """Run the load average service."""
    typer.echo(f"Serving on http://{host}:{port}/loadavg")
    uvicorn.run("app.main:app", host=host, port=port)
