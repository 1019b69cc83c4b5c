from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from ryandata_form_constraints.models import RyanDataConstraintError
from ryandata_form_constraints.service import ConstraintService

app = typer.Typer(help="Check constraint specifications and validate values against them.")


def parse_value(raw: str, *, as_string: bool = False) -> Any:
    """Decode a command-line value.

    JSON literals (numbers, null, true/false, quoted strings, arrays) are
    decoded; anything else is kept as the raw string.
    """
    if as_string:
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def load_service(constraints_file: Path) -> ConstraintService:
    """Build a service from a constraint file, exiting with code 1 on error."""
    try:
        return ConstraintService(constraints_file)
    except FileNotFoundError:
        typer.echo(f"Constraint file not found: {constraints_file}")
        raise typer.Exit(code=1) from None
    except RyanDataConstraintError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from None


@app.command()
def check(
    constraints_file: Path = typer.Argument(..., help="JSON constraint specification."),  # noqa: B008
) -> None:
    """Resolve every constrained field and report configuration errors."""
    service = load_service(constraints_file)
    errors = service.check_constraints()
    if errors:
        for error in errors:
            typer.echo(str(error))
        typer.echo(f"{len(errors)} configuration error(s) found.")
        raise typer.Exit(code=1)

    registry = service.constraint_registry
    field_count = sum(len(registry.field_names(t)) for t in registry.type_names())
    typer.echo(f"OK: {len(registry)} type(s), {field_count} field(s) resolved.")


@app.command()
def validate(
    constraints_file: Path = typer.Argument(..., help="JSON constraint specification."),  # noqa: B008
    type_name: str = typer.Argument(..., help="Type name, e.g. Person."),  # noqa: B008
    field_name: str = typer.Argument(..., help="Field name, e.g. firstName."),  # noqa: B008
    value: str = typer.Argument(..., help="Value to validate (JSON literal or text)."),  # noqa: B008
    as_string: bool = typer.Option(  # noqa: B008
        False,
        "--string",
        "-s",
        help="Treat the value as a plain string instead of decoding JSON.",
    ),
) -> None:
    """Validate one value against a field's constraints."""
    service = load_service(constraints_file)
    try:
        errors = service.validate(type_name, field_name, parse_value(value, as_string=as_string))
    except RyanDataConstraintError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from None

    if errors is None:
        typer.echo("valid")
        raise typer.Exit(code=0)

    typer.echo(json.dumps(errors, indent=2, default=str))
    raise typer.Exit(code=2)


@app.command()
def validators() -> None:
    """List the built-in validator names."""
    for name in ConstraintService().available_validators():
        typer.echo(name)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
