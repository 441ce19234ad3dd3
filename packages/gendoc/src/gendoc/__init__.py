"""gendoc - Generate long-form documents from outlines using LLMs."""

__version__ = "0.1.0"

from gendoc.config import GendocConfig, load_config
from gendoc.context import build_context
from gendoc.engine import GenerationEngine
from gendoc.exceptions import (
    AiResponseParseError,
    ArticleGenerationError,
    ChapterSummaryError,
    ConfigurationError,
    CorruptStateError,
    GendocError,
    GenerationInProgressError,
    InvalidProjectNameError,
    NoGeneratedContentError,
    NoOutlineError,
    OutlineExistsError,
    OutlineGenerationError,
    OutlineSchemaMismatchError,
    ProjectExistsError,
    ProjectNotFoundError,
    SourceFileNotFoundError,
    TemplateFileNotFoundError,
    UnsupportedPublishModeError,
)
from gendoc.models import (
    ArticleRef,
    ArticleStatus,
    BookProject,
    GeneratedArticle,
    GeneratedChapter,
    GeneratedContent,
    GenerationStatus,
    Idea,
    Outline,
    OutlineChapter,
    Project,
    ProjectType,
    SeriesProject,
    TemplatedProject,
    parse_project,
)
from gendoc.progress import ProgressEvent, ProgressReporter, ProgressStage, ProjectProgress, percentage
from gendoc.publisher import Publisher, PublishMode, PublishResult
from gendoc.service import GendocService, ProjectDetails, ProjectSummary
from gendoc.state import StateStore, seed_from_outline
from gendoc.workspace import Workspace

__all__ = [
    "__version__",
    # Config
    "GendocConfig",
    "load_config",
    # Service
    "GendocService",
    "ProjectDetails",
    "ProjectSummary",
    # Engine
    "GenerationEngine",
    "build_context",
    "StateStore",
    "seed_from_outline",
    "Workspace",
    # Progress
    "ProgressEvent",
    "ProgressReporter",
    "ProgressStage",
    "ProjectProgress",
    "percentage",
    # Publishing
    "Publisher",
    "PublishMode",
    "PublishResult",
    # Models
    "ArticleRef",
    "ArticleStatus",
    "BookProject",
    "GeneratedArticle",
    "GeneratedChapter",
    "GeneratedContent",
    "GenerationStatus",
    "Idea",
    "Outline",
    "OutlineChapter",
    "Project",
    "ProjectType",
    "SeriesProject",
    "TemplatedProject",
    "parse_project",
    # Exceptions
    "GendocError",
    "AiResponseParseError",
    "ArticleGenerationError",
    "ChapterSummaryError",
    "ConfigurationError",
    "CorruptStateError",
    "GenerationInProgressError",
    "InvalidProjectNameError",
    "NoGeneratedContentError",
    "NoOutlineError",
    "OutlineExistsError",
    "OutlineGenerationError",
    "OutlineSchemaMismatchError",
    "ProjectExistsError",
    "ProjectNotFoundError",
    "SourceFileNotFoundError",
    "TemplateFileNotFoundError",
    "UnsupportedPublishModeError",
]
