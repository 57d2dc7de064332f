"""
CLI utility helpers: output formatting and JSON input loading.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hive_canon.core.errors import ErrorContext, StorageError, categorize_error
from hive_canon.core.jsontypes import JsonObject, load_json_object
from hive_canon.core.result import Err, Ok, try_result

console = Console()
err_console = Console(stderr=True)


# ── Input helpers ────────────────────────────────────────────────────────


def read_object(path: Path | None) -> JsonObject | None:
    """Load a JSON object from ``path``; exits with code 1 on parse failure."""
    if path is None:
        return None
    match load_json_object(path):
        case Ok(data):
            return data
        case Err(error):
            fail(error)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: Exception, *, code: int = 1) -> None:
    """Print ``error`` in red and exit."""
    err_console.print(f"[bold red]Error[/bold red] ({categorize_error(error).value}): {escape(str(error))}")
    raise typer.Exit(code=code)


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def write_json(path: Path, payload: Any) -> None:
    """Write ``payload`` as indented JSON; exits with code 1 if ``path`` is not writable."""
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    written = try_result(lambda: path.write_text(text, encoding="utf-8"))
    if written.is_err():
        error = written.error
        reason = getattr(error, "strerror", None) or error
        fail(StorageError(f"Cannot write {path}: {reason}", cause=error,
                          context=ErrorContext(source=str(path))))


def print_table(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    if not rows:
        console.print("[dim]No items.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*[_cell(v) for v in row.values()])
    console.print(table)


def print_messages(title: str, messages: list[str], *, style: str) -> None:
    if not messages:
        return
    console.print(f"[bold]{title}[/bold]")
    for message in messages:
        console.print(f"  [{style}]•[/{style}] {message}")


def _cell(value: Any) -> str:
    if value is None:
        return "[dim]—[/dim]"
    if isinstance(value, bool):
        return "[green]yes[/green]" if value else "[dim]no[/dim]"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)
