"""
CLI: contract commands: ``specs``, ``show``, ``enforce``, ``validate``.
"""

from __future__ import annotations

from pathlib import Path

import typer

from hive_canon.cli.utils import (
    console,
    fail,
    print_json,
    print_messages,
    print_table,
    read_object,
    write_json,
)
from hive_canon.contract.enforcer import enforce
from hive_canon.contract.registry import CANONICAL_REGISTRY, lookup_spec
from hive_canon.contract.validator import validate
from hive_canon.core.logging import LogContext, get_logger
from hive_canon.core.result import Err, Ok
from hive_canon.core.settings import get_settings

logger = get_logger(__name__)

# Exit code for "ran fine, but the contract is not satisfied"
EXIT_INVALID = 2


def _require_spec(lab_type: str) -> None:
    result = lookup_spec(lab_type)
    if result.is_err():
        fail(result.error)


def register(app: typer.Typer) -> None:
    """Attach the contract commands to ``app``."""
    app.command("specs")(list_specs)
    app.command("show")(show_spec)
    app.command("enforce")(enforce_command)
    app.command("validate")(validate_command)


def list_specs(
    json_out: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """List registered Lab types and their required fields."""
    specs = list(CANONICAL_REGISTRY.values())
    if json_out:
        print_json([spec.to_dict() for spec in specs])
        return
    rows = [
        {
            "lab_type": spec.entity_type,
            "label": spec.label,
            "context_domain": spec.context_domain,
            "qbr_domain": spec.qbr_domain,
            "required": spec.required_paths,
        }
        for spec in specs
    ]
    print_table(rows, title="Canonical Contracts")


def show_spec(
    lab_type: str = typer.Argument(..., help="Lab type, e.g. brand"),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Show the field contract for one Lab type."""
    match lookup_spec(lab_type):
        case Err(error):
            fail(error)
        case Ok(spec):
            if json_out:
                print_json(spec.to_dict())
                return
            rows = [
                {
                    "path": f.path,
                    "label": f.label,
                    "type": f.type.value,
                    "required": f.required,
                    "min": f.min_length if f.min_length is not None else f.min_items,
                    "criticality": f.criticality.value,
                }
                for f in spec.fields
            ]
            print_table(rows, title=f"{spec.label} ({spec.entity_type})")


def enforce_command(
    lab_type: str = typer.Argument(..., help="Lab type, e.g. brand"),
    canonical: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Canonical findings JSON file."
    ),
    v1: Path | None = typer.Option(
        None, "--v1", exists=True, dir_okay=False, help="Legacy v1 result JSON (first fallback)."
    ),
    llm: Path | None = typer.Option(
        None, "--llm", exists=True, dir_okay=False, help="Raw LLM result JSON (second fallback)."
    ),
    diagnostic: Path | None = typer.Option(
        None, "--diagnostic", exists=True, dir_okay=False, help="Diagnostic input JSON."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the cleaned canonical here."),
    json_out: bool = typer.Option(False, "--json", help="Emit the full result as JSON."),
) -> None:
    """Fill, null and strip a canonical object so it satisfies its contract."""
    settings = get_settings()
    _require_spec(lab_type)

    with LogContext(lab_type=lab_type, source=str(canonical)):
        result = enforce(
            lab_type,
            read_object(canonical),
            read_object(v1),
            read_object(llm),
            diagnostic_input=read_object(diagnostic),
        )
        logger.info(
            "enforce_finished",
            valid=result.valid,
            synthesized=result.synthesized_fields,
            nulled=result.null_fields,
        )

    if output is not None:
        write_json(output, result.canonical)

    if json_out:
        print_json(result.to_dict())
    else:
        status = "[green]valid[/green]" if result.valid else "[red]invalid[/red]"
        console.print(f"[bold]{lab_type}[/bold]: {status}")
        print_messages("Synthesized", result.synthesized_fields, style="cyan")
        print_messages("Set to null", result.null_fields, style="yellow")
        print_messages("Errors", result.errors, style="red")
        if output is None:
            print_json(result.canonical)
        else:
            console.print(f"[dim]Wrote {output}[/dim]")

    if not result.valid and settings.fail_on_invalid:
        raise typer.Exit(code=EXIT_INVALID)


def validate_command(
    lab_type: str = typer.Argument(..., help="Lab type, e.g. brand"),
    canonical: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Canonical findings JSON file."
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON."),
) -> None:
    """Check a canonical object against its contract without changing it."""
    _require_spec(lab_type)

    report = validate(lab_type, read_object(canonical))

    if json_out:
        print_json(report.to_dict())
    else:
        status = "[green]valid[/green]" if report.valid else "[red]invalid[/red]"
        console.print(f"[bold]{lab_type}[/bold]: {status}")
        if report.violations:
            rows = [
                {"path": v.field, "problem": v.message, "expects": v.constraint}
                for v in report.violations
            ]
            print_table(rows, title="Violations")
        else:
            print_messages("Errors", report.errors, style="red")

    if not report.valid:
        raise typer.Exit(code=1)
