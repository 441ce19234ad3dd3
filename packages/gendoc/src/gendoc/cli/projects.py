"""
Project commands: create, list, inspect and delete projects.
"""

from typing import Optional

import click

from ..models import BookProject, Idea, Outline, ProjectType, SeriesProject, TemplatedProject
from ..progress import ProjectProgress
from .common import get_service, handle_errors

DEFAULT_TEMPLATE_PATH = "templates/template.md"


def format_progress(progress: Optional[ProjectProgress]) -> str:
    if progress is None:
        return "not started"
    text = f"{progress.percentage}% ({progress.done}/{progress.total} articles)"
    if progress.error:
        text += f", {progress.error} failed"
    return text


def format_outline(outline: Outline) -> str:
    lines = [outline.title]
    for index, chapter in enumerate(outline.chapters, start=1):
        lines.append(f"  {index}. {chapter.title}")
        for article in chapter.articles:
            lines.append(f"     - {article.title}")
    return "\n".join(lines)


@click.command("new")
@click.argument("name")
@click.option(
    "--type",
    "project_type",
    type=click.Choice([t.value for t in ProjectType]),
    default=None,
    help="Kind of document to generate.",
)
@click.option("--lang", "language", default=None, help="Language to write in (book and series).")
@click.option("--summary", default=None, help="What the document is about (book and series).")
@click.option("--prompt", "requirements", default=None, help="Extra requirements for the whole document.")
@click.option(
    "--source",
    "sources",
    multiple=True,
    help="Source file, relative to the project directory (templated; repeatable).",
)
@click.option("--template", default=None, help="Template file, relative to the project directory (templated).")
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def new_command(
    ctx: click.Context,
    name: str,
    project_type: Optional[str],
    language: Optional[str],
    summary: Optional[str],
    requirements: Optional[str],
    sources: tuple[str, ...],
    template: Optional[str],
) -> None:
    """
    Create a new project. Missing values are prompted for.

    Examples:
      gendoc new tea-history --type book --lang en --summary "A history of tea"
      gendoc new report --type templated --template templates/report.md --source sources/data.md
    """
    service = get_service(ctx)

    if project_type is None:
        project_type = click.prompt(
            "Project type",
            type=click.Choice([t.value for t in ProjectType]),
            default=ProjectType.BOOK.value,
        )

    if project_type == ProjectType.TEMPLATED.value:
        if template is None:
            template = click.prompt("Template file", default=DEFAULT_TEMPLATE_PATH)
        if not sources:
            entered = click.prompt("Source files (comma separated)", default="", show_default=False)
            sources = tuple(part.strip() for part in entered.split(",") if part.strip())
        project = TemplatedProject(name=name, template=template, sources=list(sources))
    else:
        if language is None:
            language = click.prompt("Language", default=service.config.app.language)
        if summary is None:
            summary = click.prompt("Summary")
        if requirements is None:
            requirements = click.prompt("Requirements", default="", show_default=False)
        idea = Idea(language=language, summary=summary, prompt=requirements)
        if project_type == ProjectType.SERIES.value:
            project = SeriesProject(name=name, idea=idea)
        else:
            project = BookProject(name=name, idea=idea)

    service.create_project(project)
    click.echo(f"Created {project.type} project '{name}' in {service.workspace.project_dir(name)}")
    if isinstance(project, TemplatedProject):
        click.echo("Place the template and source files in the project directory before generating the outline.")


@click.command("ls")
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def list_command(ctx: click.Context) -> None:
    """List all projects with their status and progress."""
    summaries = get_service(ctx).list_projects()
    if not summaries:
        click.echo("No projects found")
        return

    for summary in summaries:
        if summary.error:
            click.echo(f"{summary.name}  (unreadable: {summary.error})")
            continue
        outline = "outline" if summary.has_outline else "no outline"
        click.echo(
            f"{summary.name}  [{summary.type}]  {summary.generation_status.value}  "
            f"{outline}  {format_progress(summary.progress)}"
        )


@click.command("status")
@click.argument("name")
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def status_command(ctx: click.Context, name: str) -> None:
    """Show a project's outline and generation progress."""
    details = get_service(ctx).get_details(name)
    project = details.project

    click.echo(f"Name:     {project.name}")
    click.echo(f"Type:     {project.type}")
    click.echo(f"Created:  {project.created_at:%Y-%m-%d %H:%M}")
    click.echo(f"Status:   {project.generation_status.value}")
    click.echo(f"Progress: {format_progress(details.progress)}")

    if project.outline is None:
        click.echo("Outline:  none (run `gendoc outline` to create one)")
    else:
        click.echo("Outline:")
        click.echo(format_outline(project.outline))


@click.command("rm")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.help_option("--help", "-h")
@click.pass_context
@handle_errors
def remove_command(ctx: click.Context, name: str, yes: bool) -> None:
    """Delete a project and everything generated for it."""
    if not yes and not click.confirm(f"Delete project '{name}' and all of its files?", default=False):
        click.echo("Aborted")
        return
    get_service(ctx).delete_project(name)
    click.echo(f"Deleted project '{name}'")
