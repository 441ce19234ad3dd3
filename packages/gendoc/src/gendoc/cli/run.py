"""
Run command: generate every article that is not done yet.
"""

import click
from tqdm import tqdm

from ..exceptions import NoOutlineError
from ..progress import ProgressEvent, ProgressStage
from .common import get_service, handle_errors, run_async


@click.command("run")
@click.argument("name")
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def run_command(ctx: click.Context, name: str) -> None:
    """
    Generate the content of a project, resuming after the last finished article.

    Examples:
      gendoc run tea-history
    """
    service = get_service(ctx)
    details = service.get_details(name)
    if details.project.outline is None:
        raise NoOutlineError(name)

    total = details.project.outline.article_count
    initial = details.progress.done if details.progress else 0

    with tqdm(total=total, initial=initial, desc=f"Generating {name}", unit="article") as bar:

        def on_progress(event: ProgressEvent) -> None:
            if event.stage == ProgressStage.CLAIMED:
                bar.set_postfix_str(event.current_title)
            else:
                bar.update(event.done - bar.n)

        content = run_async(service, service.start_generation(name, on_progress=on_progress))

    click.echo(f"Generated {content.article_count} articles for '{name}'")
