"""
Publish command: export generated content as Markdown or a zip archive.
"""

import click

from ..publisher import PublishMode
from .common import get_service, handle_errors


@click.command("publish")
@click.argument("name")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in PublishMode]),
    default=PublishMode.SINGLE.value,
    show_default=True,
    help="single: one Markdown file; multi: zip with one file per article.",
)
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def publish_command(ctx: click.Context, name: str, mode: str) -> None:
    """
    Publish whatever has been generated so far.

    Examples:
      gendoc publish tea-history
      gendoc publish tea-history --mode multi
    """
    result = get_service(ctx).publish(name, mode)
    click.echo(result.message)
