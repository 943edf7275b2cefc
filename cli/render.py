from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_load_average(payload: Dict[str, Any]) -> None:
    echo_heading("Load Average")
    echo_key_values(
        [
            ("last", payload.get("last")),
            ("last5", payload.get("last5")),
            ("last15", payload.get("last15")),
        ]
    )
