import json
import logging
from pathlib import Path
from typing import Optional

import typer

from cli import commands
from cli.utils import pretty_json

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show binding decisions"),
) -> None:
    """Bind external JSON data to form fields."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=2)


@app.command("bind")
def bind(
    form: str = typer.Option(..., "--form", help="Form YAML file or form name"),
    payload: Path = typer.Option(..., "--payload", dir_okay=False, help="Decoded JSON payload file"),
    field: Optional[str] = typer.Option(None, "--field", help="Only bind this field id"),
) -> None:
    """Print initial values and select options resolved from a payload."""
    try:
        result = commands.bind(form, payload, field_id=field)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        _fail(f"Error: {exc}")
    typer.echo(pretty_json(result.to_dict()))
    counts = commands.summarize(result)
    typer.echo(
        f"Bound {counts['initial_values']} initial values, {counts['select_options']} option lists",
        err=True,
    )


@app.command("preview")
def preview(
    form: str = typer.Option(..., "--form", help="Form YAML file or form name"),
    payload: Path = typer.Option(..., "--payload", dir_okay=False, help="Decoded JSON payload file"),
) -> None:
    """Show how each field of a form would be filled from a payload."""
    try:
        report = commands.preview(form, payload)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        _fail(f"Error: {exc}")
    for line in commands.print_preview(report):
        typer.echo(line)


@app.command("resolve")
def resolve(
    expression: str = typer.Argument(..., help="Path expression, e.g. data.items[].value"),
    payload: Path = typer.Option(..., "--payload", dir_okay=False, help="Decoded JSON payload file"),
) -> None:
    """Evaluate a path expression against a payload."""
    try:
        value = commands.resolve(payload, expression)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        _fail(f"Error: {exc}")
    if value is None:
        typer.echo(f"Nothing found at {expression!r}", err=True)
        raise typer.Exit(code=1)
    typer.echo(pretty_json(value))


if __name__ == "__main__":
    app()
