"""
Root Typer application for the hive-canon CLI.
"""

from __future__ import annotations

import pydantic
import typer
from typer import Typer

from hive_canon.cli import contract
from hive_canon.cli.utils import fail
from hive_canon.core.errors import ConfigError
from hive_canon.core.logging import configure_logging
from hive_canon.core.settings import get_settings

app = Typer(
    name="hive-canon",
    help="hive-canon: canonical field contracts for diagnostic Lab outputs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _first_problem(error: pydantic.ValidationError) -> str:
    problem = error.errors()[0]
    field = ".".join(str(part) for part in problem["loc"])
    return f"{field}: {problem['msg']}"


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from hive_canon import __version__

        typer.echo(f"hive-canon {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override HIVE_CANON_LOG_LEVEL for this run."
    ),
) -> None:
    """hive-canon CLI: inspect, validate and enforce Lab canonical contracts."""
    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        fail(ConfigError(f"Invalid HIVE_CANON_ settings: {_first_problem(e)}", cause=e))
    try:
        configure_logging(
            level=log_level or settings.log_level,
            json_format=settings.json_logs,
            service=settings.service_name,
        )
    except ConfigError as e:
        fail(e)


# ── Sub-command registration ─────────────────────────────────────────────

contract.register(app)


if __name__ == "__main__":
    app()
