"""Workspace directory layout."""

from pathlib import Path

from .exceptions import InvalidProjectNameError

PROJECTS_DIR_NAME = "projects"
PROJECT_FILE_NAME = "project.json"
GENERATED_FILE_NAME = "generated.json"
OUTPUT_DIR_NAME = "output"
LOCK_FILE_NAME = ".generation.lock"
DEFAULT_WORKSPACE = Path.home() / ".gendoc-workspace"


class Workspace:
    """Resolves on-disk locations for projects under a workspace root.

    Layout::

        <root>/projects/<name>/project.json
        <root>/projects/<name>/generated.json
        <root>/projects/<name>/output/
    """

    def __init__(self, root: Path | str = DEFAULT_WORKSPACE):
        self.root = Path(root).expanduser()

    @property
    def projects_dir(self) -> Path:
        return self.root / PROJECTS_DIR_NAME

    def project_dir(self, name: str) -> Path:
        validate_project_name(name)
        return self.projects_dir / name

    def project_file(self, name: str) -> Path:
        return self.project_dir(name) / PROJECT_FILE_NAME

    def generated_file(self, name: str) -> Path:
        return self.project_dir(name) / GENERATED_FILE_NAME

    def output_dir(self, name: str) -> Path:
        return self.project_dir(name) / OUTPUT_DIR_NAME

    def lock_file(self, name: str) -> Path:
        return self.project_dir(name) / LOCK_FILE_NAME

    def list_project_dirs(self) -> list[Path]:
        """Return project directories sorted by name."""
        if not self.projects_dir.exists():
            return []
        return sorted(
            (item for item in self.projects_dir.iterdir() if item.is_dir() and not item.name.startswith(".")),
            key=lambda item: item.name,
        )


def validate_project_name(name: str) -> str:
    """Ensure a project name is usable as a single directory name."""
    if not name or not name.strip() or name in (".", "..") or "/" in name or "\\" in name:
        raise InvalidProjectNameError(name)
    return name
