"""Rule CLI commands."""

import click

from smartfield.service import ValidationService


@click.group()
def rules():
    """Rule registry commands."""
    pass


@rules.command("list")
def list_cmd():
    """List built-in validation rules."""
    service = ValidationService()
    for name in service.rules.list_registered():
        rule = service.get_rule(name)
        click.echo(f"{click.style(name, bold=True)}: {rule.message}")
