"""Registry CLI commands."""

import click

from formforge.formatters import FormatterRegistry
from formforge.validators import ValidatorRegistry


@click.group()
def registry():
    """Validator and formatter registry commands."""
    pass


@registry.command("list")
def list_cmd():
    """List registered validator and formatter names."""
    click.echo("Validators:")
    for name in ValidatorRegistry.list_registered():
        click.echo(f"  {name}")
    click.echo("Formatters:")
    for name in FormatterRegistry.list_registered():
        click.echo(f"  {name}")
