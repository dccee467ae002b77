"""formforge CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """formforge: declarative form validation and formatting."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from formforge.cli.form_cmd import check, format_cmd  # noqa: E402
from formforge.cli.registry_cmd import registry  # noqa: E402
from formforge.cli.schema_cmd import schema  # noqa: E402

cli.add_command(schema)
cli.add_command(registry)
cli.add_command(check)
cli.add_command(format_cmd)
