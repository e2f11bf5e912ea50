"""smartfield CLI entry point."""

import logging

import click

from smartfield.settings import SmartFieldSettings


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool):
    """smartfield field validation CLI."""
    settings = SmartFieldSettings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommand groups
from smartfield.cli.fields_cmd import fields  # noqa: E402
from smartfield.cli.rules_cmd import rules  # noqa: E402

cli.add_command(fields)
cli.add_command(rules)
