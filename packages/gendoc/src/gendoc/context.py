"""Prompt context assembly for a single article."""

from typing import assert_never

from .models import BookProject, GeneratedContent, Project, SeriesProject, TemplatedProject

SOURCE_SEPARATOR = "\n\n---\n\n"


def build_context(
    project: Project,
    content: GeneratedContent,
    chapter_index: int,
    article_index: int,
    source_text: str = "",
) -> str:
    """Build the prompt text handed to the generation service for one article.

    The context holds the document goal, the project's global intent, the
    summaries of every already-summarized chapter up to the target chapter,
    and the summaries of the target article's siblings. Article summaries of
    other chapters are never included, which keeps the prompt bounded as the
    document grows.

    Chapters and articles are addressed by position; titles are only
    displayed.

    Args:
        project: The owning project
        content: Generation state so far
        chapter_index: Position of the target chapter
        article_index: Position of the target article within its chapter
        source_text: Concatenated source files (templated projects only)

    Returns:
        The complete context string
    """
    chapter = content.chapters[chapter_index]
    article = chapter.articles[article_index]

    lines = [f'The overall goal is to write a {project.type} titled "{content.title}".']

    if isinstance(project, (BookProject, SeriesProject)):
        lines.append(f"Global idea: {project.idea.summary}")
        lines.append(f"Language: {project.idea.language}")
    elif isinstance(project, TemplatedProject):
        lines.append(f"Global Context from Source Files:\n{source_text}")
    else:
        assert_never(project)

    lines.append("---CONTEXT---")

    for index, previous in enumerate(content.chapters[: chapter_index + 1]):
        if previous.summary:
            lines.append(f'Summary of previous chapter "{previous.title}": {previous.summary}')
        if index == chapter_index:
            for sibling_index, sibling in enumerate(previous.articles):
                if sibling.summary and sibling_index != article_index:
                    lines.append(f'Summary of previous article "{sibling.title}": {sibling.summary}')

    lines.append("---TASK---")
    lines.append(f'You are now writing the article "{article.title}" within the chapter "{chapter.title}".')
    lines.append("Please write the full content for this article.")
    return "\n".join(lines)
