"""Schema CLI commands: validate and fields."""

from pathlib import Path

import click

from formforge.errors import SchemaLoadError
from formforge.metadata.loader import load_form_file
from formforge.metadata.validator import validate_schema_dir, validate_schema_file
from formforge.schema import build_field_table
from formforge.settings import default_schema_path


@click.group()
def schema():
    """Form schema commands."""
    pass


@schema.command()
@click.argument(
    "target_path",
    required=False,
    type=click.Path(path_type=Path),
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
def validate(target_path: Path | None, strict: bool):
    """Validate a form schema file, or every schema in a directory.

    Defaults to FORMFORGE_SCHEMA_PATH, or ./forms.
    """
    target_path = target_path or default_schema_path()
    if not target_path.exists():
        click.echo(f"Error: Schema path not found at {target_path}", err=True)
        raise SystemExit(1)

    if target_path.is_dir():
        issues = validate_schema_dir(target_path, strict=strict)
    else:
        issues = validate_schema_file(target_path)
        if strict:
            for issue in issues:
                issue.severity = "error"

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    click.echo(click.style("All form schemas are valid.", fg="green", bold=True))


@schema.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def fields(schema_file: Path):
    """Print the flattened field table of a form schema."""
    try:
        form = load_form_file(schema_file)
    except SchemaLoadError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    table = build_field_table(form.fields, form.defaults)
    click.echo(f"Form '{form.name}' ({len(table)} fields):")
    for key, field in table.items():
        rules = []
        if field.type:
            rules.append(f"type={field.type}")
        if field.format:
            rules.append(f"format={field.format}")
        if field.required:
            rules.append("required")
        if field.not_null:
            rules.append("notNull")
        if field.match:
            rules.append(f"match={field.match}")
        if field.has_equal:
            rules.append(f"equal={field.equal!r}")
        click.echo(f"  {key}" + (f" ({', '.join(rules)})" if rules else ""))
