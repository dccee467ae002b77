"""Form data CLI commands: check and format."""

from pathlib import Path

import click
import yaml

from formforge.errors import FormForgeError
from formforge.metadata.loader import FormSchema, load_form_file, read_document
from formforge.settings import EngineSettings

_schema_argument = click.argument(
    "schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_data_argument = click.argument(
    "data_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_field_option = click.option(
    "--field",
    "-f",
    "field_names",
    multiple=True,
    help="Restrict to this field (repeatable). Defaults to all fields.",
)


def _selection(field_names: tuple[str, ...]) -> tuple:
    return (list(field_names),) if field_names else ()


def _load(schema_file: Path, data_file: Path) -> tuple[FormSchema, dict]:
    form = load_form_file(schema_file)
    data = read_document(data_file)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise click.BadParameter(
            f"{data_file} must contain a mapping", param_hint="DATA_FILE"
        )
    return form, data


@click.command()
@_schema_argument
@_data_argument
@_field_option
@click.option(
    "--format-first",
    is_flag=True,
    default=False,
    help="Run the formatters before validating.",
)
def check(schema_file: Path, data_file: Path, field_names: tuple[str, ...], format_first: bool):
    """Validate a YAML/JSON data file against a form schema."""
    try:
        form, data = _load(schema_file, data_file)
        engine = form.create_engine(data, settings=EngineSettings.from_env())
        if format_first:
            engine.format_fields(*_selection(field_names))
        result = engine.validate_fields(*_selection(field_names))
    except FormForgeError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    if result.ok:
        click.echo(click.style(f"Form '{form.name}': all fields are valid.", fg="green", bold=True))
        return

    for entry in result.errors or []:
        click.echo(click.style(f"  ✗ {entry.key}: {', '.join(entry.flags)}", fg="red"))
    click.echo(
        click.style(f"\nForm '{form.name}': {len(result.errors or [])} field error(s)", fg="red", bold=True)
    )
    raise SystemExit(1)


@click.command("format")
@_schema_argument
@_data_argument
@_field_option
@click.option(
    "--in-place",
    is_flag=True,
    default=False,
    help="Write the formatted data back to DATA_FILE instead of printing it.",
)
def format_cmd(schema_file: Path, data_file: Path, field_names: tuple[str, ...], in_place: bool):
    """Apply the schema's formatters to a YAML/JSON data file."""
    try:
        form, data = _load(schema_file, data_file)
        engine = form.create_engine(data)
        engine.format_fields(*_selection(field_names))
    except FormForgeError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    output = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if in_place:
        data_file.write_text(output)
        click.echo(f"Formatted {data_file}")
    else:
        click.echo(output, nl=False)
