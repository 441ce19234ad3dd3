"""Pytest configuration for gendoc tests."""

import json
import os
from unittest.mock import patch

import pytest
from gendoc.config import AppConfig, GendocConfig
from gendoc.models import BookProject, Idea, Outline, TemplatedProject
from gendoc.service import GendocService
from gendoc.state import StateStore
from gendoc.workspace import Workspace
from llm_core import AsyncProviderClient, Role
from llm_core.exceptions import APIError

# Variables that would leak the developer's environment into tests
ISOLATED_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_API_BASE",
    "HTTPS_PROXY",
    "LLM_ENABLE_PROMPT_LOGGING",
    "MOCK_LLM",
    "GENDOC_LANG",
    "GENDOC_WORKSPACE",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point GENDOC_HOME at a temp dir and drop gendoc/LLM env vars."""
    with patch.dict(os.environ, {"GENDOC_HOME": str(tmp_path / "home")}):
        for key in ISOLATED_ENV_VARS:
            os.environ.pop(key, None)
        # No stray .env file from the working directory
        monkeypatch.chdir(tmp_path)
        yield


class FakeClient(AsyncProviderClient):
    """Scripted generation client.

    Responses are numbered by call so tests can tell them apart:
    ``Body <n>`` for articles, ``Summary <n>`` for article summaries,
    ``Chapter summary <n>`` for chapters and the configured outline JSON for
    outline requests. Calls whose 1-based number is in ``fail_on`` raise
    ``APIError``.
    """

    def __init__(self, outline=None, fail_on=(), outline_text=None):
        self.outline = outline
        self.outline_text = outline_text
        self.fail_on = set(fail_on)
        self.calls = []
        self.closed = False

    @property
    def call_count(self):
        return len(self.calls)

    def kinds(self):
        """Kind of each call made so far ('article', 'summary', 'chapter', 'outline')."""
        return [self._kind(messages) for messages in self.calls]

    @staticmethod
    def _kind(messages):
        system = " ".join(m["content"] for m in messages if m["role"] == Role.SYSTEM.value)
        if "JSON" in system:
            return "outline"
        if "entire chapter" in system:
            return "chapter"
        if "summarizer" in system:
            return "summary"
        return "article"

    async def generate(self, messages, model=None):
        self.calls.append(messages)
        number = len(self.calls)
        if number in self.fail_on:
            raise APIError(f"scripted failure on call {number}")

        kind = self._kind(messages)
        if kind == "outline":
            if self.outline_text is not None:
                return self.outline_text
            return json.dumps(self.outline)
        if kind == "chapter":
            return f"Chapter summary {number}"
        if kind == "summary":
            return f"Summary {number}"
        return f"Body {number}"

    async def close(self):
        self.closed = True


@pytest.fixture
def make_client():
    """Factory for FakeClient instances."""
    return FakeClient


@pytest.fixture
def fake_client(outline_data):
    return FakeClient(outline=outline_data)


@pytest.fixture
def outline_data():
    """Raw outline as the generation service would return it."""
    return {
        "title": "T",
        "chapters": [
            {"title": "C1", "articles": [{"title": "A1"}, {"title": "A2"}]},
            {"title": "C2", "articles": [{"title": "B1"}]},
        ],
    }


@pytest.fixture
def outline(outline_data):
    return Outline.model_validate(outline_data)


@pytest.fixture
def idea():
    return Idea(language="English", summary="A short history of tea", prompt="Keep it light")


@pytest.fixture
def book_project(idea, outline):
    """A book project that already has an outline."""
    return BookProject(name="tea", idea=idea, outline=outline)


@pytest.fixture
def templated_project(outline):
    return TemplatedProject(
        name="report",
        template="templates/template.md",
        sources=["sources/a.md", "sources/b.md"],
        outline=outline,
    )


@pytest.fixture
def workspace(tmp_path):
    return Workspace(tmp_path / "workspace")


@pytest.fixture
def store(workspace):
    return StateStore(workspace)


@pytest.fixture
def config(tmp_path):
    return GendocConfig(app=AppConfig(workspace=tmp_path / "workspace"))


@pytest.fixture
def service(config, fake_client):
    return GendocService(config, client=fake_client)
