"""Data models for gendoc projects, outlines, and generation state."""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from llm_core.config import BaseConfig
from pydantic import ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class DocModel(BaseConfig):
    """Base for persisted models: snake_case in Python, camelCase on disk."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """Dump to the on-disk JSON shape (camelCase keys, unset optionals omitted)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Outline
# =============================================================================


class ArticleRef(DocModel):
    """An article planned by the outline (title only, no content yet)."""

    model_config = ConfigDict(frozen=True)

    title: str


class OutlineChapter(DocModel):
    """A chapter of the outline: a titled, ordered list of articles."""

    model_config = ConfigDict(frozen=True)

    title: str
    articles: list[ArticleRef] = Field(default_factory=list)


class Outline(DocModel):
    """The planned structure of a document. Immutable once generated."""

    model_config = ConfigDict(frozen=True)

    title: str
    chapters: list[OutlineChapter] = Field(default_factory=list)

    @property
    def article_count(self) -> int:
        return sum(len(chapter.articles) for chapter in self.chapters)


# =============================================================================
# Generated content
# =============================================================================


class ArticleStatus(str, Enum):
    """Generation status of a single article.

    pending -> writing -> done | error, and error -> writing on the next run.
    """

    PENDING = "pending"
    WRITING = "writing"
    DONE = "done"
    ERROR = "error"


class GeneratedArticle(DocModel):
    """Mutable generation state of one article."""

    title: str
    summary: Optional[str] = None
    content: Optional[str] = None
    status: ArticleStatus = ArticleStatus.PENDING


class GeneratedChapter(DocModel):
    """Mutable generation state of one chapter.

    ``summary`` stays unset until every article in the chapter is done.
    """

    title: str
    summary: Optional[str] = None
    articles: list[GeneratedArticle] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return all(article.status == ArticleStatus.DONE for article in self.articles)


class GeneratedContent(DocModel):
    """Generation state for one project, shaped like its outline."""

    title: str
    chapters: list[GeneratedChapter] = Field(default_factory=list)

    @property
    def article_count(self) -> int:
        return sum(len(chapter.articles) for chapter in self.chapters)

    def count_status(self, status: ArticleStatus) -> int:
        """Count articles currently in the given status."""
        return sum(1 for chapter in self.chapters for article in chapter.articles if article.status == status)


# =============================================================================
# Projects
# =============================================================================


class ProjectType(str, Enum):
    """Kinds of documents gendoc can produce."""

    BOOK = "book"
    SERIES = "series"
    TEMPLATED = "templated"


class GenerationStatus(str, Enum):
    """Whether a generation run is in flight for a project."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ERROR = "error"


class Idea(DocModel):
    """The seed of a book or series."""

    language: str
    summary: str
    prompt: str = Field(description="Global requirements applied to the whole document")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProjectBase(DocModel):
    """Fields shared by every project type."""

    name: str
    created_at: datetime = Field(default_factory=_utcnow)
    outline: Optional[Outline] = None
    generation_status: GenerationStatus = GenerationStatus.IDLE


class BookProject(ProjectBase):
    type: Literal["book"] = "book"
    idea: Idea


class SeriesProject(ProjectBase):
    type: Literal["series"] = "series"
    idea: Idea


class TemplatedProject(ProjectBase):
    """A project whose outline is extracted from a template file.

    ``sources`` and ``template`` are paths relative to the project directory.
    """

    type: Literal["templated"] = "templated"
    sources: list[str] = Field(default_factory=list)
    template: str


Project = Annotated[
    Union[BookProject, SeriesProject, TemplatedProject],
    Field(discriminator="type"),
]

_project_adapter: TypeAdapter[Project] = TypeAdapter(Project)


def parse_project(data: object) -> Project:
    """Validate a raw mapping into the matching project variant.

    Raises:
        pydantic.ValidationError: If the data matches no project variant
    """
    return _project_adapter.validate_python(data)
