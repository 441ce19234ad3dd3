"""Durable generation state, one JSON document per project."""

from typing import Optional

from loguru import logger
from pydantic import ValidationError

from .exceptions import CorruptStateError
from .models import (
    ArticleStatus,
    GeneratedArticle,
    GeneratedChapter,
    GeneratedContent,
    Outline,
)
from .storage import read_json, write_json_atomic
from .workspace import Workspace


def seed_from_outline(outline: Outline) -> GeneratedContent:
    """Create fresh generation state mirroring the outline, every article pending."""
    return GeneratedContent(
        title=outline.title,
        chapters=[
            GeneratedChapter(
                title=chapter.title,
                articles=[
                    GeneratedArticle(title=article.title, status=ArticleStatus.PENDING) for article in chapter.articles
                ],
            )
            for chapter in outline.chapters
        ],
    )


def matches_outline(content: GeneratedContent, outline: Outline) -> bool:
    """Check that generation state has the same shape and titles as the outline."""
    if len(content.chapters) != len(outline.chapters):
        return False
    for generated, planned in zip(content.chapters, outline.chapters):
        if generated.title != planned.title or len(generated.articles) != len(planned.articles):
            return False
        for article, ref in zip(generated.articles, planned.articles):
            if article.title != ref.title:
                return False
    return True


def reset_interrupted_articles(content: GeneratedContent) -> int:
    """Demote articles stuck in ``writing`` to ``error`` so a later run retries them.

    Returns:
        Number of articles reset
    """
    count = 0
    for chapter in content.chapters:
        for article in chapter.articles:
            if article.status == ArticleStatus.WRITING:
                article.status = ArticleStatus.ERROR
                count += 1
    return count


class StateStore:
    """Loads and saves ``GeneratedContent`` keyed by project name.

    Saves are full overwrites performed atomically (temp file + rename). The
    store assumes a single writer per project; see ``gendoc.locking``.
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def exists(self, project_name: str) -> bool:
        return self.workspace.generated_file(project_name).exists()

    def load(self, project_name: str) -> Optional[GeneratedContent]:
        """Load generation state.

        Returns:
            The stored state, or None if no generation has run yet

        Raises:
            CorruptStateError: If the stored state is not valid
        """
        path = self.workspace.generated_file(project_name)
        if not path.exists():
            return None

        data = read_json(path, project_name)
        try:
            return GeneratedContent.model_validate(data)
        except ValidationError as e:
            raise CorruptStateError(project_name, path, str(e)) from e

    def load_for_outline(self, project_name: str, outline: Outline) -> Optional[GeneratedContent]:
        """Load generation state and verify it is still shaped like the outline.

        Raises:
            CorruptStateError: If the state is invalid or diverges from the outline
        """
        content = self.load(project_name)
        if content is not None and not matches_outline(content, outline):
            raise CorruptStateError(
                project_name,
                self.workspace.generated_file(project_name),
                "generated content does not match the project outline",
            )
        return content

    def save(self, project_name: str, content: GeneratedContent) -> None:
        write_json_atomic(self.workspace.generated_file(project_name), content.to_json_dict())

    def delete(self, project_name: str) -> bool:
        """Delete stored state. Returns True if a file was removed."""
        path = self.workspace.generated_file(project_name)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted generation state for project '{project_name}'")
        return True
