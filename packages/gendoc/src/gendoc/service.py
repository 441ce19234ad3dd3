"""Caller-facing operations over the gendoc workspace."""

from datetime import datetime
from typing import Any, Mapping, Optional

from llm_core import AsyncProviderClient
from llm_core.config import BaseConfig
from loguru import logger
from pydantic import ValidationError

from .config import GendocConfig
from .engine import GenerationEngine
from .exceptions import (
    GendocError,
    GenerationInProgressError,
    NoOutlineError,
    OutlineExistsError,
    OutlineSchemaMismatchError,
)
from .llm import build_client
from .locking import ProjectLock, is_locked, read_lock_owner
from .models import GeneratedContent, GenerationStatus, Outline, Project, parse_project
from .outline import OutlineGenerator
from .progress import ProgressCallback, ProjectProgress
from .projects import ProjectRepository
from .publisher import Publisher, PublishMode, PublishResult
from .state import StateStore, reset_interrupted_articles
from .workspace import Workspace


class ProjectSummary(BaseConfig):
    """One row of the project listing.

    ``error`` is set (and the other optional fields left empty) when the
    project's files could not be read.
    """

    name: str
    type: Optional[str] = None
    created_at: Optional[datetime] = None
    generation_status: Optional[GenerationStatus] = None
    has_outline: bool = False
    progress: Optional[ProjectProgress] = None
    error: Optional[str] = None


class ProjectDetails(BaseConfig):
    """A project together with its generation progress, if generation has started."""

    project: Project
    progress: Optional[ProjectProgress] = None


class GendocService:
    """Facade used by the CLI for every project operation.

    The generation client is created lazily from the configuration on the first
    call that needs it, so listing or publishing never requires an API key.
    Pass ``client`` to inject one (tests, alternative providers).
    """

    def __init__(self, config: GendocConfig, client: Optional[AsyncProviderClient] = None):
        self.config = config
        self.workspace = Workspace(config.workspace_path)
        self.projects = ProjectRepository(self.workspace)
        self.store = StateStore(self.workspace)
        self.publisher = Publisher(self.workspace)
        self._client = client

    @property
    def client(self) -> AsyncProviderClient:
        if self._client is None:
            self._client = build_client(self.config)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    # =========================================================================
    # Projects
    # =========================================================================

    def create_project(self, data: Project | Mapping[str, Any]) -> Project:
        """
        Create a project from a model or a raw mapping.

        Raises:
            ProjectExistsError: If the project already exists
            InvalidProjectNameError: If the name is not a valid directory name
            pydantic.ValidationError: If a raw mapping is not a valid project
        """
        project = data if isinstance(data, BaseConfig) else parse_project(dict(data))
        return self.projects.create(project)

    def delete_project(self, name: str) -> None:
        """
        Delete a project and all of its files.

        Raises:
            ProjectNotFoundError: If the project does not exist
            GenerationInProgressError: If a generation run holds the project
        """
        self._ensure_not_running(name)
        self.projects.delete(name)

    def list_projects(self) -> list[ProjectSummary]:
        summaries = []
        for name in self.projects.list_names():
            try:
                project = self.projects.load(name)
                content = self.store.load(name)
            except GendocError as e:
                logger.warning(f"Skipping unreadable project '{name}': {e}")
                summaries.append(ProjectSummary(name=name, error=str(e)))
                continue

            summaries.append(
                ProjectSummary(
                    name=name,
                    type=project.type,
                    created_at=project.created_at,
                    generation_status=project.generation_status,
                    has_outline=project.outline is not None,
                    progress=ProjectProgress.from_content(content) if content else None,
                )
            )
        return summaries

    def get_details(self, name: str) -> ProjectDetails:
        """
        Load a project with its progress.

        Raises:
            ProjectNotFoundError: If the project does not exist
            CorruptStateError: If project or generation state is invalid
        """
        project = self.projects.load(name)
        content = self.store.load(name)
        progress = ProjectProgress.from_content(content) if content else None
        return ProjectDetails(project=project, progress=progress)

    # =========================================================================
    # Outline
    # =========================================================================

    async def generate_outline(self, name: str, overwrite: bool = False) -> Outline:
        """
        Generate and store an outline for a project.

        Raises:
            ProjectNotFoundError: If the project does not exist
            OutlineExistsError: If an outline exists and ``overwrite`` is False
            GenerationInProgressError: If a generation run holds the project
            TemplateFileNotFoundError: If a templated project's template is missing
            OutlineGenerationError: If the outline could not be generated or parsed
        """
        project = self.projects.load(name)
        if project.outline is not None and not overwrite:
            raise OutlineExistsError(name)
        self._ensure_not_running(name)

        generator = OutlineGenerator(self.client)
        outline = await generator.generate(project, self.workspace.project_dir(name))
        self._replace_outline(project, outline)
        return outline

    def save_outline(self, name: str, outline: Outline | Mapping[str, Any]) -> Outline:
        """
        Store a manually edited outline.

        Raises:
            ProjectNotFoundError: If the project does not exist
            OutlineSchemaMismatchError: If a raw mapping is not a valid outline
            GenerationInProgressError: If a generation run holds the project
        """
        if not isinstance(outline, Outline):
            try:
                outline = Outline.model_validate(outline)
            except ValidationError as e:
                raise OutlineSchemaMismatchError(name, e.errors(include_url=False)) from e

        project = self.projects.load(name)
        self._ensure_not_running(name)
        self._replace_outline(project, outline)
        return outline

    def _replace_outline(self, project: Project, outline: Outline) -> None:
        """Store a new outline; generated state for a different outline is discarded."""
        if project.outline != outline and self.store.delete(project.name):
            logger.info(f"Outline of '{project.name}' changed, generation state reset")
            project.generation_status = GenerationStatus.IDLE
        project.outline = outline
        self.projects.save(project)

    # =========================================================================
    # Generation
    # =========================================================================

    async def start_generation(
        self,
        name: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GeneratedContent:
        """
        Run generation for every article that is not done yet.

        The project is ``running`` for the duration of the run, then
        ``completed`` or ``error``. Errors are re-raised after the status is
        recorded.

        Raises:
            ProjectNotFoundError: If the project does not exist
            NoOutlineError: If the project has no outline
            GenerationInProgressError: If another run holds the project
            ArticleGenerationError: If an article fails
            ChapterSummaryError: If a chapter summary fails
        """
        project = self.projects.load(name)
        if project.outline is None:
            raise NoOutlineError(name)

        with ProjectLock(self.workspace.lock_file(name), name):
            engine = GenerationEngine(self.client, self.store, self.workspace)

            project.generation_status = GenerationStatus.RUNNING
            self.projects.save(project)
            try:
                content = await engine.run(project, on_progress)
            except Exception:
                self._reset_interrupted(name)
                project.generation_status = GenerationStatus.ERROR
                self.projects.save(project)
                raise

            project.generation_status = GenerationStatus.COMPLETED
            self.projects.save(project)
            return content

    def _reset_interrupted(self, name: str) -> None:
        """Mark articles left in ``writing`` as ``error`` so the next run retries them."""
        try:
            content = self.store.load(name)
        except GendocError as e:
            logger.warning(f"Could not inspect generation state of '{name}': {e}")
            return
        if content is None:
            return
        reset = reset_interrupted_articles(content)
        if reset:
            self.store.save(name, content)
            logger.warning(f"Marked {reset} interrupted article(s) of '{name}' as error")

    def recover_stale_runs(self) -> list[str]:
        """
        Reset projects left ``running`` by a process that no longer exists.

        Their status goes back to ``idle`` and any article caught mid-write is
        marked ``error`` so the next run retries it.

        Returns:
            Names of the recovered projects
        """
        recovered = []
        for name in self.projects.list_names():
            try:
                project = self.projects.load(name)
                if project.generation_status != GenerationStatus.RUNNING:
                    continue
                if is_locked(self.workspace.lock_file(name)):
                    continue

                self._reset_interrupted(name)
                project.generation_status = GenerationStatus.IDLE
                self.projects.save(project)
            except GendocError as e:
                logger.warning(f"Could not recover project '{name}': {e}")
                continue

            logger.warning(f"Recovered interrupted generation run for '{name}'")
            recovered.append(name)
        return recovered

    # =========================================================================
    # Publishing
    # =========================================================================

    def publish(self, name: str, mode: PublishMode | str = PublishMode.SINGLE) -> PublishResult:
        """
        Publish a project's generated content.

        Raises:
            ProjectNotFoundError: If the project does not exist
            NoGeneratedContentError: If generation never ran
            UnsupportedPublishModeError: If the mode is unknown
        """
        self.projects.load(name)
        return self.publisher.publish(name, self.store.load(name), mode)

    def _ensure_not_running(self, name: str) -> None:
        lock_file = self.workspace.lock_file(name)
        if is_locked(lock_file):
            raise GenerationInProgressError(name, read_lock_owner(lock_file))
