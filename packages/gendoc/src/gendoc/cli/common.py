"""
Shared utilities for CLI commands.

This module provides the service construction, async execution and error to
exit code mapping used by every command.
"""

import asyncio
import functools
import sys
from typing import Any, Awaitable, Callable, Optional, TypeVar

import click
from llm_core import LlmModelError
from loguru import logger

from ..config import load_config
from ..exceptions import (
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
from ..service import GendocService

T = TypeVar("T")

# Exit code per error class; lookup follows the MRO so subclasses without an
# entry fall back to their parent's code.
EXIT_CODES: dict[type[Exception], int] = {
    GendocError: 1,
    ProjectNotFoundError: 2,
    ProjectExistsError: 3,
    InvalidProjectNameError: 4,
    NoOutlineError: 5,
    OutlineExistsError: 6,
    OutlineGenerationError: 7,
    AiResponseParseError: 8,
    OutlineSchemaMismatchError: 9,
    ArticleGenerationError: 10,
    ChapterSummaryError: 11,
    CorruptStateError: 12,
    SourceFileNotFoundError: 13,
    TemplateFileNotFoundError: 14,
    NoGeneratedContentError: 15,
    UnsupportedPublishModeError: 16,
    GenerationInProgressError: 17,
    ConfigurationError: 18,
    LlmModelError: 20,
}


def exit_code_for(error: Exception) -> int:
    """Return the exit code registered for the closest class of ``error``."""
    for cls in type(error).__mro__:
        if cls in EXIT_CODES:
            return EXIT_CODES[cls]
    return 1


def handle_errors(func: Callable[..., T]) -> Callable[..., T]:
    """Print gendoc and generation service errors to stderr and exit with their code."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (GendocError, LlmModelError) as e:
            logger.debug(f"Command failed with {type(e).__name__}: {e}")
            click.echo(f"Error: {e}", err=True)
            sys.exit(exit_code_for(e))

    return wrapper


class CliState:
    """Per-invocation state stored on the click context."""

    def __init__(self, overrides: Optional[dict[str, Any]] = None):
        self.overrides = overrides or {}
        self._service: Optional[GendocService] = None

    @property
    def service(self) -> GendocService:
        """Build the service on first use and recover runs interrupted by a crash."""
        if self._service is None:
            self._service = GendocService(load_config(self.overrides))
            for name in self._service.recover_stale_runs():
                click.echo(f"Recovered interrupted generation run for '{name}'", err=True)
        return self._service


def get_service(ctx: click.Context) -> GendocService:
    return ctx.ensure_object(CliState).service


def run_async(service: GendocService, coro: Awaitable[T]) -> T:
    """Run a service coroutine to completion, closing the generation client afterwards."""

    async def _runner() -> T:
        try:
            return await coro
        finally:
            await service.aclose()

    return asyncio.run(_runner())
