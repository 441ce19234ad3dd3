"""
Config commands: inspect and edit the global configuration file.
"""

import json

import click

from ..config import (
    coerce_value,
    get_global_config_value,
    global_config_path,
    read_global_config,
    set_global_config_value,
)


@click.group("config")
@click.help_option("--help", "-h")
def config_command() -> None:
    """Read and write the global configuration (~/.gendoc/config.json)."""
    pass


@config_command.command("list")
def list_config() -> None:
    """Print the global configuration file."""
    click.echo(f"# {global_config_path()}")
    click.echo(json.dumps(read_global_config(), indent=2, ensure_ascii=False))


@config_command.command("get")
@click.argument("key")
def get_config(key: str) -> None:
    """Print one value, using dot notation (e.g. llm.model)."""
    value = get_global_config_value(key)
    if value is None:
        click.echo(f"'{key}' is not set", err=True)
        raise SystemExit(1)
    click.echo(json.dumps(value, ensure_ascii=False) if isinstance(value, (dict, list)) else value)


@config_command.command("set")
@click.argument("key")
@click.argument("value")
def set_config(key: str, value: str) -> None:
    """
    Set one value, using dot notation.

    "true"/"false" are stored as booleans and numeric strings as numbers.

    Examples:
      gendoc config set llm.model gpt-4o-mini
      gendoc config set app.mock true
    """
    set_global_config_value(key, coerce_value(value, key))
    click.echo(f"Set {key}")
