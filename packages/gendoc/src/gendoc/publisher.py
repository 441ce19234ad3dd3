"""Render generation state into a shareable artifact."""

import re
import zipfile
from enum import Enum
from pathlib import Path
from typing import Optional

from llm_core.config import BaseConfig
from loguru import logger

from .exceptions import NoGeneratedContentError, UnsupportedPublishModeError
from .models import GeneratedContent
from .workspace import Workspace

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9\u4e00-\u9fff-]")


class PublishMode(str, Enum):
    """Shape of the published artifact."""

    SINGLE = "single"  # one Markdown document
    MULTI = "multi"  # zip with one Markdown file per article


class PublishResult(BaseConfig):
    message: str
    file_path: Path
    mode: PublishMode


def slugify(title: str) -> str:
    """Lowercase, join words with '-', and drop characters outside [a-z0-9-] and CJK ideographs."""
    slug = _WHITESPACE_RE.sub("-", title.lower())
    return _DISALLOWED_RE.sub("", slug)


def unique_slug(title: str, taken: set[str]) -> str:
    """Slugify a title, suffixing -2, -3, ... when the slug is already taken."""
    base = slugify(title) or "untitled"
    slug = base
    counter = 2
    while slug in taken:
        slug = f"{base}-{counter}"
        counter += 1
    taken.add(slug)
    return slug


def render_markdown(content: GeneratedContent) -> str:
    """Render all chapters and articles, in outline order, as one Markdown document.

    Chapters use ``##`` headings and articles ``###``; articles without content
    render with an empty body.
    """
    chapters = []
    for chapter in content.chapters:
        articles = "\n\n".join(f"### {article.title}\n\n{article.content or ''}" for article in chapter.articles)
        chapters.append(f"## {chapter.title}\n\n{articles}")
    return "\n\n".join(chapters)


def write_article_archive(content: GeneratedContent, zip_path: Path) -> int:
    """Write one Markdown file per article, grouped by chapter directory, into a zip.

    Returns:
        Number of article files written
    """
    count = 0
    chapter_slugs: set[str] = set()
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for chapter in content.chapters:
            chapter_dir = unique_slug(chapter.title, chapter_slugs)
            article_slugs: set[str] = set()
            for article in chapter.articles:
                name = f"{chapter_dir}/{unique_slug(article.title, article_slugs)}.md"
                archive.writestr(name, article.content or "")
                count += 1
    return count


class Publisher:
    """Writes published artifacts into a project's output directory."""

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def publish(
        self,
        project_name: str,
        content: Optional[GeneratedContent],
        mode: PublishMode | str = PublishMode.SINGLE,
    ) -> PublishResult:
        """
        Publish whatever has been generated so far.

        Raises:
            NoGeneratedContentError: If generation never ran for the project
            UnsupportedPublishModeError: If the mode is unknown
        """
        try:
            mode = PublishMode(mode)
        except ValueError as e:
            raise UnsupportedPublishModeError(project_name, str(mode)) from e

        if content is None:
            raise NoGeneratedContentError(project_name)

        output_dir = self.workspace.output_dir(project_name)
        output_dir.mkdir(parents=True, exist_ok=True)

        if mode == PublishMode.SINGLE:
            file_path = output_dir / f"{project_name}.md"
            file_path.write_text(render_markdown(content), encoding="utf-8")
            message = f"Project published to {file_path}"
        else:
            file_path = output_dir / f"{project_name}.zip"
            count = write_article_archive(content, file_path)
            message = f"Project published as {count} articles to {file_path}"

        logger.info(message)
        return PublishResult(message=message, file_path=file_path, mode=mode)
