"""Tests for gendoc locking module."""

import os
import time

import pytest
from gendoc.exceptions import GenerationInProgressError
from gendoc.locking import UNREADABLE_LOCK_GRACE_SECONDS, ProjectLock, is_locked, pid_alive, read_lock_owner

DEAD_PID = 999999999


@pytest.fixture
def lock_path(tmp_path):
    return tmp_path / "project" / ".generation.lock"


class TestPidAlive:
    """Tests for pid_alive."""

    def test_current_process(self):
        assert pid_alive(os.getpid()) is True

    def test_dead_process(self):
        assert pid_alive(DEAD_PID) is False

    def test_invalid_pid(self):
        assert pid_alive(0) is False


class TestProjectLock:
    """Tests for ProjectLock class."""

    def test_records_owner_and_releases(self, lock_path):
        """Test that the lock file holds our PID while held and is removed on exit."""
        with ProjectLock(lock_path, "tea"):
            assert read_lock_owner(lock_path) == os.getpid()
            assert is_locked(lock_path) is True

        assert not lock_path.exists()
        assert is_locked(lock_path) is False

    def test_released_on_error(self, lock_path):
        with pytest.raises(RuntimeError):
            with ProjectLock(lock_path, "tea"):
                raise RuntimeError("boom")

        assert not lock_path.exists()

    def test_live_owner_blocks(self, lock_path):
        """Test that a lock held by a live process cannot be taken."""
        with ProjectLock(lock_path, "tea"):
            with pytest.raises(GenerationInProgressError) as exc_info:
                ProjectLock(lock_path, "tea").acquire()

        assert exc_info.value.owner_pid == os.getpid()

    def test_stale_lock_is_broken(self, lock_path):
        """Test that a lock left by a dead process is replaced."""
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text(str(DEAD_PID), encoding="utf-8")

        with ProjectLock(lock_path, "tea"):
            assert read_lock_owner(lock_path) == os.getpid()

    def test_unreadable_lock_is_broken_once_old(self, lock_path):
        """Test that a lock with no readable PID is broken after the grace period."""
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text("garbage", encoding="utf-8")
        old = time.time() - UNREADABLE_LOCK_GRACE_SECONDS - 5
        os.utime(lock_path, (old, old))

        assert read_lock_owner(lock_path) is None
        assert is_locked(lock_path) is False
        with ProjectLock(lock_path, "tea"):
            assert read_lock_owner(lock_path) == os.getpid()

    @pytest.mark.parametrize("content", ["", "garbage"])
    def test_fresh_unreadable_lock_is_held(self, lock_path, content):
        """Test that a lock whose PID has not been written yet is not broken."""
        lock_path.parent.mkdir(parents=True)
        lock_path.write_text(content, encoding="utf-8")

        assert is_locked(lock_path) is True
        with pytest.raises(GenerationInProgressError):
            ProjectLock(lock_path, "tea").acquire()
        assert lock_path.read_text(encoding="utf-8") == content

    def test_lock_file_never_empty(self, lock_path):
        """Test that the lock appears with its PID and leaves no temp files."""
        with ProjectLock(lock_path, "tea"):
            assert lock_path.read_text(encoding="utf-8") == str(os.getpid())
            assert [p.name for p in lock_path.parent.iterdir()] == [lock_path.name]
