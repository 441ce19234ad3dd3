"""
Main CLI entry point for gendoc.

Usage:
    gendoc <command> [args...]
    gendoc --help

Available commands:
    new       Create a project
    ls        List projects
    status    Show a project's outline and progress
    outline   Generate a project's outline
    run       Generate every remaining article
    publish   Publish generated content
    rm        Delete a project
    config    Read and write the global configuration

Examples:
    gendoc new my-book --type book --lang en --summary "A history of tea"
    gendoc outline my-book
    gendoc run my-book
    gendoc publish my-book --mode multi
"""

import sys
from typing import Optional

import click

from ..config import global_config_path
from ..logging_config import setup_logging
from .common import CliState
from .config import config_command
from .outline import outline_command
from .projects import list_command, new_command, remove_command, status_command
from .publish import publish_command
from .run import run_command


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Console log level.",
)
@click.option("--mock", is_flag=True, default=False, help="Use canned responses instead of the generation service.")
@click.help_option("--help", "-h")
@click.pass_context
def cli(ctx: click.Context, log_level: str, mock: bool) -> None:
    """gendoc - Generate books, article series and templated documents with an LLM."""
    setup_logging(level=log_level, log_dir=global_config_path().parent / "logs")
    overrides: Optional[dict] = {"app": {"mock": True}} if mock else None
    ctx.obj = CliState(overrides)


# Add the subcommands
cli.add_command(new_command)
cli.add_command(list_command)
cli.add_command(status_command)
cli.add_command(outline_command)
cli.add_command(run_command)
cli.add_command(publish_command)
cli.add_command(remove_command)
cli.add_command(config_command)


def main() -> None:
    """
    Main function to handle CLI execution with error handling.
    """
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(130)
