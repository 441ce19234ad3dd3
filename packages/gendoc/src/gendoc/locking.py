"""Single-writer enforcement for a project's generation state."""

import os
import tempfile
import time
from pathlib import Path
from typing import Optional

from loguru import logger

from .exceptions import GenerationInProgressError

# A lock file with no readable PID younger than this is treated as held
UNREADABLE_LOCK_GRACE_SECONDS = 30.0


def pid_alive(pid: int) -> bool:
    """Return True if a process with this PID exists."""
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        # Exists, owned by someone else
        return True
    except OSError:
        return False
    return True


def read_lock_owner(path: Path) -> Optional[int]:
    """Return the PID recorded in a lock file, or None if absent or unreadable."""
    try:
        return int(path.read_text(encoding="utf-8").strip())
    except (FileNotFoundError, ValueError):
        return None


def _lock_age(path: Path) -> Optional[float]:
    try:
        return time.time() - path.stat().st_mtime
    except FileNotFoundError:
        return None


def is_locked(path: Path) -> bool:
    """True if the lock file exists and is held.

    A lock is held when its owner is still alive, or when it records no
    readable owner but was written recently.
    """
    owner = read_lock_owner(path)
    if owner is not None:
        return pid_alive(owner)
    age = _lock_age(path)
    return age is not None and age < UNREADABLE_LOCK_GRACE_SECONDS


class ProjectLock:
    """Advisory lock file held while a generation run is in flight.

    The lock file records the owner PID and appears with its content already
    written (hard-linked from a temp file). A lock left behind by a process
    that no longer exists, or an unreadable one older than
    ``UNREADABLE_LOCK_GRACE_SECONDS``, is considered stale and is broken on
    acquire.

    Usage::

        with ProjectLock(path, project_name):
            ...
    """

    def __init__(self, path: Path, project_name: str):
        self.path = path
        self.project_name = project_name
        self._held = False

    def acquire(self) -> None:
        """Take the lock.

        Raises:
            GenerationInProgressError: If the lock is held by another run
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        for _ in range(2):
            if self._create():
                self._held = True
                return
            if is_locked(self.path):
                raise GenerationInProgressError(self.project_name, read_lock_owner(self.path))
            logger.warning(
                f"Breaking stale generation lock for '{self.project_name}' (pid {read_lock_owner(self.path)})"
            )
            self.path.unlink(missing_ok=True)
        raise GenerationInProgressError(self.project_name, read_lock_owner(self.path))

    def _create(self) -> bool:
        """Publish a lock file containing our PID; False if one already exists."""
        fd, tmp_name = tempfile.mkstemp(prefix=f"{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(str(os.getpid()))
            try:
                os.link(tmp_name, self.path)
            except FileExistsError:
                return False
            return True
        finally:
            Path(tmp_name).unlink(missing_ok=True)

    def release(self) -> None:
        if self._held:
            self.path.unlink(missing_ok=True)
            self._held = False

    def __enter__(self) -> "ProjectLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()
