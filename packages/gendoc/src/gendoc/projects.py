"""File-backed project metadata storage."""

import shutil

from loguru import logger
from pydantic import ValidationError

from .exceptions import CorruptStateError, ProjectExistsError, ProjectNotFoundError
from .models import Project, TemplatedProject, parse_project
from .storage import read_json, write_json_atomic
from .workspace import Workspace

TEMPLATED_SUBDIRS = ("sources", "templates")


class ProjectRepository:
    """CRUD for ``project.json`` documents, one directory per project."""

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def exists(self, name: str) -> bool:
        return self.workspace.project_file(name).exists()

    def create(self, project: Project) -> Project:
        """
        Persist a new project and create its directory layout.

        Raises:
            ProjectExistsError: If a project directory with that name exists
        """
        project_dir = self.workspace.project_dir(project.name)
        if project_dir.exists():
            raise ProjectExistsError(project.name)

        project_dir.mkdir(parents=True)
        if isinstance(project, TemplatedProject):
            for subdir in TEMPLATED_SUBDIRS:
                (project_dir / subdir).mkdir()

        self.save(project)
        logger.info(f"Created {project.type} project '{project.name}'")
        return project

    def load(self, name: str) -> Project:
        """
        Load a project.

        Raises:
            ProjectNotFoundError: If the project has no metadata file
            CorruptStateError: If the metadata is not a valid project
        """
        path = self.workspace.project_file(name)
        if not path.exists():
            raise ProjectNotFoundError(name)

        data = read_json(path, name)
        try:
            return parse_project(data)
        except ValidationError as e:
            raise CorruptStateError(name, path, str(e)) from e

    def save(self, project: Project) -> None:
        write_json_atomic(self.workspace.project_file(project.name), project.to_json_dict())

    def delete(self, name: str) -> None:
        """
        Delete a project directory with everything in it.

        Raises:
            ProjectNotFoundError: If the project directory does not exist
        """
        project_dir = self.workspace.project_dir(name)
        if not project_dir.exists():
            raise ProjectNotFoundError(name)
        shutil.rmtree(project_dir)
        logger.info(f"Deleted project '{name}'")

    def list_names(self) -> list[str]:
        return [path.name for path in self.workspace.list_project_dirs()]
