"""Outline generation: prompt building, response parsing and validation."""

import json
from pathlib import Path
from typing import Optional, assert_never

from llm_core import AsyncProviderClient, LlmModelError, strip_code_fences
from loguru import logger
from pydantic import ValidationError

from .exceptions import (
    AiResponseParseError,
    OutlineGenerationError,
    OutlineSchemaMismatchError,
    TemplateFileNotFoundError,
)
from .models import BookProject, Outline, Project, SeriesProject, TemplatedProject
from .prompts import build_extract_outline_prompt, build_outline_prompt


def outline_schema() -> str:
    """JSON schema of the outline, embedded in prompts."""
    return json.dumps(Outline.model_json_schema(by_alias=True))


def read_template(project: TemplatedProject, project_dir: Path) -> str:
    """Read a templated project's template file.

    Raises:
        TemplateFileNotFoundError: If the template file does not exist
    """
    path = project_dir / project.template
    if not path.is_file():
        raise TemplateFileNotFoundError(project.name, path)
    return path.read_text(encoding="utf-8")


def build_outline_messages(project: Project, project_dir: Path) -> list[dict]:
    """Build the outline request for any project type."""
    schema = outline_schema()
    if isinstance(project, (BookProject, SeriesProject)):
        return build_outline_prompt(project.type, project.idea, schema)
    elif isinstance(project, TemplatedProject):
        return build_extract_outline_prompt(read_template(project, project_dir), schema)
    else:
        assert_never(project)


def parse_outline_response(text: str, project_name: Optional[str] = None) -> Outline:
    """Parse and validate an outline returned by the generation service.

    Raises:
        AiResponseParseError: If the text is not JSON (after stripping code fences)
        OutlineSchemaMismatchError: If the JSON does not match the outline schema
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AiResponseParseError(project_name, text) from e

    try:
        return Outline.model_validate(data)
    except ValidationError as e:
        raise OutlineSchemaMismatchError(project_name, e.errors(include_url=False)) from e


class OutlineGenerator:
    """Asks the generation service for a project's outline."""

    def __init__(self, client: AsyncProviderClient, model: Optional[str] = None):
        self.client = client
        self.model = model

    async def generate(self, project: Project, project_dir: Path) -> Outline:
        """
        Generate an outline for the project.

        Returns:
            The validated outline

        Raises:
            TemplateFileNotFoundError: If a templated project's template is missing
            OutlineGenerationError: If the service call fails
            AiResponseParseError: If the response is not JSON
            OutlineSchemaMismatchError: If the response does not match the schema
        """
        messages = build_outline_messages(project, project_dir)
        logger.info(f"Requesting outline for '{project.name}' ({project.type})")

        try:
            response = await self.client.generate(messages, model=self.model)
        except LlmModelError as e:
            raise OutlineGenerationError(f"Outline generation failed: {e}", project.name) from e

        outline = parse_outline_response(response, project.name)
        logger.info(
            f"Outline for '{project.name}': {len(outline.chapters)} chapters, {outline.article_count} articles"
        )
        return outline
