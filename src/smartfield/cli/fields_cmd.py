"""Field configuration CLI commands."""

from pathlib import Path

import click

from smartfield.loader import FieldConfigError, check_field_config_file, load_field_configs
from smartfield.service import ValidationService

_config_option = click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="SMARTFIELD_FIELDS_PATH",
    help="YAML file with additional field configurations.",
)


def _build_service(config_path: Path | None) -> ValidationService:
    """Built-in service plus any field configs loaded from config_path."""
    service = ValidationService()
    if config_path is None:
        return service
    try:
        configs = load_field_configs(config_path, service.rules)
    except FieldConfigError as e:
        for issue in e.issues:
            click.echo(click.style(str(issue), fg="red"), err=True)
        raise SystemExit(1)
    for config in configs:
        service.register_field_config(config)
    return service


@click.group()
def fields():
    """Field configuration commands."""
    pass


@fields.command("list")
@_config_option
def list_cmd(config_path: Path | None):
    """List registered field configurations."""
    service = _build_service(config_path)
    for name in service.fields.list_registered():
        config = service.get_field_config(name)
        rule_names = ", ".join(rule.name for rule in config.rules) or "-"
        flag = " (required)" if config.required else ""
        click.echo(f"  {name} [{config.field_type.value}]{flag}: {rule_names}")


@fields.command()
@click.argument("field_name")
@click.argument("value")
@_config_option
def validate(field_name: str, value: str, config_path: Path | None):
    """Validate VALUE against the configuration for FIELD_NAME."""
    service = _build_service(config_path)
    if service.get_field_config(field_name) is None:
        click.echo(
            click.style(f"No configuration for '{field_name}'; treating as valid.", fg="yellow")
        )

    result = service.validate_field(field_name, value)
    if result.is_valid:
        click.echo(click.style("Valid.", fg="green", bold=True))
        return

    for error in result.errors:
        click.echo(click.style(f"  ✗ {error}", fg="red"))
    click.echo(
        click.style(f"\n{len(result.errors)} error(s) found", fg="red", bold=True)
    )
    raise SystemExit(1)


@fields.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(path: Path):
    """Check a YAML field configuration file."""
    issues = check_field_config_file(path)
    if not issues:
        try:
            load_field_configs(path, ValidationService().rules)
        except FieldConfigError as e:
            issues = e.issues

    for issue in issues:
        click.echo(click.style(str(issue), fg="red"))

    if issues:
        click.echo(click.style(f"\n{len(issues)} issue(s) found", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style("Field configuration is valid.", fg="green", bold=True))
