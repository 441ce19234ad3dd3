"""Progress events and aggregate progress computation."""

from enum import Enum
from typing import Callable, Optional

from llm_core.config import BaseConfig
from loguru import logger

from .models import ArticleStatus, GeneratedContent


def percentage(done: int, total: int) -> int:
    """Completion percentage rounded half-up; 0 when there is nothing to do."""
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


class ProgressStage(str, Enum):
    """Point in an article's processing at which an event is emitted."""

    CLAIMED = "claimed"
    COMPLETED = "completed"


class ProgressEvent(BaseConfig):
    """One progress notification emitted by the generation engine."""

    total: int
    done: int
    current_title: str
    chapter_title: str
    stage: ProgressStage

    @property
    def percentage(self) -> int:
        return percentage(self.done, self.total)


ProgressCallback = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Turns engine transitions into progress events.

    Events are delivered synchronously, exactly once per transition, in the
    order the engine processes articles. ``done`` never decreases.
    """

    def __init__(self, total: int, done: int = 0, callback: Optional[ProgressCallback] = None):
        self.total = total
        self.done = done
        self.callback = callback

    def claimed(self, chapter_title: str, article_title: str) -> ProgressEvent:
        return self._emit(chapter_title, article_title, ProgressStage.CLAIMED)

    def completed(self, chapter_title: str, article_title: str) -> ProgressEvent:
        self.done += 1
        return self._emit(chapter_title, article_title, ProgressStage.COMPLETED)

    def _emit(self, chapter_title: str, article_title: str, stage: ProgressStage) -> ProgressEvent:
        event = ProgressEvent(
            total=self.total,
            done=self.done,
            current_title=article_title,
            chapter_title=chapter_title,
            stage=stage,
        )
        logger.debug(f"Progress {event.done}/{event.total} ({event.percentage}%) {stage.value}: {article_title}")
        if self.callback:
            self.callback(event)
        return event


class ProjectProgress(BaseConfig):
    """Aggregate article counts for a project's generation state."""

    total: int = 0
    done: int = 0
    pending: int = 0
    writing: int = 0
    error: int = 0

    @property
    def percentage(self) -> int:
        return percentage(self.done, self.total)

    @classmethod
    def from_content(cls, content: GeneratedContent) -> "ProjectProgress":
        return cls(
            total=content.article_count,
            done=content.count_status(ArticleStatus.DONE),
            pending=content.count_status(ArticleStatus.PENDING),
            writing=content.count_status(ArticleStatus.WRITING),
            error=content.count_status(ArticleStatus.ERROR),
        )
