"""
Outline command: generate (or regenerate) a project's outline.
"""

import click

from .common import get_service, handle_errors, run_async
from .projects import format_outline


@click.command("outline")
@click.argument("name")
@click.option(
    "--overwrite",
    is_flag=True,
    default=False,
    help="Replace an existing outline without asking. Generated content is reset.",
)
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def outline_command(ctx: click.Context, name: str, overwrite: bool) -> None:
    """
    Generate the outline for a project.

    Examples:
      gendoc outline tea-history
      gendoc outline tea-history --overwrite
    """
    service = get_service(ctx)
    project = service.get_details(name).project

    if project.outline is not None and not overwrite:
        if not click.confirm(
            f"Project '{name}' already has an outline. Replace it and reset generated content?",
            default=False,
        ):
            click.echo("Aborted")
            return
        overwrite = True

    click.echo(f"Generating outline for '{name}'...")
    outline = run_async(service, service.generate_outline(name, overwrite=overwrite))
    click.echo(format_outline(outline))
    click.echo(f"{len(outline.chapters)} chapters, {outline.article_count} articles")
