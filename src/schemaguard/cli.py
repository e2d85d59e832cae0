#!/usr/bin/env python3
"""
CLI for validating JSON/YAML documents against schemas.

Usage:
    schemaguard validate schema.json document.yaml
    schemaguard validate schema.json document.json --backend decimal --format json
    schemaguard fit document.json branch_a.json branch_b.json
    schemaguard check schema.json
    schemaguard --version

Exit codes:
    0  document is valid
    1  validation errors were reported
    2  a file could not be loaded or the settings are invalid
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml
from pydantic import ValidationError as SettingsError

from schemaguard import __version__
from schemaguard.exceptions import SchemaGuardError
from schemaguard.schema import check_schema
from schemaguard.settings import NumericBackendName, ValidatorSettings
from schemaguard.validation import Validator, best_fit, fit_test

app = typer.Typer(
    name="schemaguard",
    help="SchemaGuard - recursive JSON Schema validation",
    no_args_is_help=True,
    add_completion=False,
)


class OutputFormat(str, Enum):
    """Output format for reports."""
    text = "text"
    json = "json"


def setup_logging(verbose: int, quiet: bool):
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )


def load_document(path: Path) -> Any:
    """
    Load a JSON or YAML document.

    Raises:
        typer.Exit: (code 2) if the file is missing or cannot be parsed
    """
    if not path.exists():
        typer.echo(f"Error: File not found: {path}", err=True)
        raise typer.Exit(2)
    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix in (".yaml", ".yml"):
            return yaml.safe_load(content)
        return json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        typer.echo(f"Error: Could not parse {path}: {e}", err=True)
        raise typer.Exit(2)


@app.command()
def validate(
    schema_file: Path = typer.Argument(..., help="Path to schema (JSON or YAML)"),
    document_file: Path = typer.Argument(..., help="Path to document (JSON or YAML)"),
    settings_file: Optional[Path] = typer.Option(None, "--settings", help="Validator settings YAML"),
    required_by_default: Optional[bool] = typer.Option(None, "--required-by-default/--no-required-by-default", help="Treat schemas without 'required' as required"),
    no_additional_properties: Optional[bool] = typer.Option(None, "--no-additional-properties/--allow-additional-properties", help="Default 'additionalProperties' to false"),
    strict: Optional[bool] = typer.Option(None, "--strict/--forgiving", help="Raise on malformed constraints"),
    backend: Optional[NumericBackendName] = typer.Option(None, "--backend", "-b", help="Numeric backend (float, decimal)"),
    format: OutputFormat = typer.Option(OutputFormat.text, "--format", "-f", help="Output format (text, json)"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """Validate a document against a schema."""
    setup_logging(verbose, quiet)

    schema = load_document(schema_file)
    document = load_document(document_file)

    try:
        settings = ValidatorSettings.from_yaml(settings_file)
        validator = Validator(
            schema,
            settings,
            required_by_default=required_by_default,
            no_additional_properties=no_additional_properties,
            strict=strict,
            numeric_backend=backend,
        )
        errors = validator.validate(document)
    except (SettingsError, ValueError, OSError) as e:
        typer.echo(f"Error: Invalid settings: {e}", err=True)
        raise typer.Exit(2)
    except SchemaGuardError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    if format == OutputFormat.json:
        typer.echo(json.dumps({
            "valid": not errors,
            "errors": [e.to_dict() for e in errors],
        }, indent=2))
    elif not quiet:
        if not errors:
            typer.echo(f"{document_file}: valid")
        for error in errors:
            suffix = f" (x{error.errorcount})" if error.errorcount > 1 else ""
            typer.echo(f"{error.path}: [{error.property}] {error.message}{suffix}")

    if errors:
        raise typer.Exit(1)


@app.command()
def fit(
    document_file: Path = typer.Argument(..., help="Path to document (JSON or YAML)"),
    schema_files: List[Path] = typer.Argument(..., help="Candidate schemas"),
    format: OutputFormat = typer.Option(OutputFormat.text, "--format", "-f", help="Output format (text, json)"),
):
    """Rank candidate schemas by how well the document fits them."""
    document = load_document(document_file)
    schemas = [load_document(path) for path in schema_files]

    scores = [fit_test(document, schema) for schema in schemas]
    best = best_fit(document, schemas)

    if format == OutputFormat.json:
        typer.echo(json.dumps({
            "scores": [
                dict(score.to_dict(), schema=str(path))
                for path, score in zip(schema_files, scores)
            ],
            "best": best,
        }, indent=2))
        return

    for index, (path, score) in enumerate(zip(schema_files, scores)):
        marker = "*" if index == best else " "
        typer.echo(f"{marker} {path}: match={score.match:g} extra={score.extra:g}")


@app.command()
def check(
    schema_file: Path = typer.Argument(..., help="Path to schema (JSON or YAML)"),
):
    """Check a schema document against its metaschema."""
    schema = load_document(schema_file)
    if not isinstance(schema, dict):
        typer.echo("Error: Schema must be an object", err=True)
        raise typer.Exit(2)

    result = check_schema(schema)
    if result["valid"]:
        typer.echo(f"{schema_file}: valid {result['draft']} schema")
        return
    for message in result["errors"]:
        typer.echo(message, err=True)
    raise typer.Exit(1)


def version_callback(value: bool):
    """Handle --version flag."""
    if value:
        typer.echo(f"schemaguard {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """SchemaGuard - recursive JSON Schema validation."""


def main():
    """Entry point for the schemaguard CLI."""
    app()


if __name__ == "__main__":
    main()
