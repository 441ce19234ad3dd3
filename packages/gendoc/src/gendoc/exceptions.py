"""Exceptions raised by the gendoc workflow.

Every error carries the name of the project it concerns so callers (CLI) can
render a user-facing message without parsing strings.
"""

from pathlib import Path
from typing import Any, Optional


class GendocError(Exception):
    """Base class for all gendoc errors."""

    def __init__(self, message: str, project_name: Optional[str] = None):
        self.message = message
        self.project_name = project_name
        super().__init__(self.message)


class ConfigurationError(GendocError):
    """Configuration is missing or invalid (e.g. no API key outside mock mode)."""

    pass


class InvalidProjectNameError(GendocError):
    """Project name cannot be used as a directory name."""

    def __init__(self, project_name: str):
        super().__init__(f"Invalid project name: '{project_name}'", project_name)


class ProjectNotFoundError(GendocError):
    """Referenced project has no persisted metadata."""

    def __init__(self, project_name: str):
        super().__init__(f"Project '{project_name}' not found", project_name)


class ProjectExistsError(GendocError):
    """A project with the same name already exists."""

    def __init__(self, project_name: str):
        super().__init__(f"Project '{project_name}' already exists", project_name)


class NoOutlineError(GendocError):
    """Generation was requested before an outline exists."""

    def __init__(self, project_name: str):
        super().__init__(
            f"Project '{project_name}' has no outline. Generate one first.",
            project_name,
        )


class OutlineExistsError(GendocError):
    """Outline generation was requested without overwrite while one exists."""

    def __init__(self, project_name: str):
        super().__init__(
            f"Project '{project_name}' already has an outline. Use overwrite to replace it.",
            project_name,
        )


class OutlineGenerationError(GendocError):
    """The generation service failed while producing an outline."""

    pass


class AiResponseParseError(OutlineGenerationError):
    """The generation service returned text that is not valid JSON."""

    def __init__(self, project_name: Optional[str], response: str):
        self.response = response
        super().__init__("Failed to parse AI response as JSON", project_name)


class OutlineSchemaMismatchError(OutlineGenerationError):
    """The generation service returned JSON that does not match the outline schema."""

    def __init__(self, project_name: Optional[str], errors: list[Any]):
        self.errors = errors
        super().__init__(f"AI response does not match the outline schema: {errors}", project_name)


class ArticleGenerationError(GendocError):
    """Generation or summarization of a single article failed.

    Attributes:
        chapter_title: Title of the chapter holding the article
        article_title: Title of the article that failed
    """

    def __init__(self, project_name: str, chapter_title: str, article_title: str, reason: str):
        self.chapter_title = chapter_title
        self.article_title = article_title
        self.reason = reason
        super().__init__(
            f"Failed to generate article '{article_title}' in chapter '{chapter_title}': {reason}",
            project_name,
        )


class ChapterSummaryError(GendocError):
    """Summarization of a completed chapter failed."""

    def __init__(self, project_name: str, chapter_title: str, reason: str):
        self.chapter_title = chapter_title
        self.reason = reason
        super().__init__(f"Failed to summarize chapter '{chapter_title}': {reason}", project_name)


class CorruptStateError(GendocError):
    """Persisted project or generation state failed to parse or validate."""

    def __init__(self, project_name: Optional[str], path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt state in {path}: {reason}", project_name)


class SourceFileNotFoundError(GendocError):
    """A source file declared by a templated project does not exist."""

    def __init__(self, project_name: str, path: Path):
        self.path = path
        super().__init__(f"Source file not found: {path}", project_name)


class TemplateFileNotFoundError(GendocError):
    """The template file declared by a templated project does not exist."""

    def __init__(self, project_name: str, path: Path):
        self.path = path
        super().__init__(f"Template file not found: {path}", project_name)


class NoGeneratedContentError(GendocError):
    """Publishing was requested but no generation has ever run."""

    def __init__(self, project_name: str):
        super().__init__(f"No generated content found for project '{project_name}'", project_name)


class UnsupportedPublishModeError(GendocError):
    """Unknown publish mode."""

    def __init__(self, project_name: str, mode: str):
        self.mode = mode
        super().__init__(f"Unsupported publish mode: '{mode}'", project_name)


class GenerationInProgressError(GendocError):
    """Another live process holds the generation lock for the project."""

    def __init__(self, project_name: str, owner_pid: Optional[int] = None):
        self.owner_pid = owner_pid
        owner = f" (pid {owner_pid})" if owner_pid else ""
        super().__init__(f"Generation already running for project '{project_name}'{owner}", project_name)
