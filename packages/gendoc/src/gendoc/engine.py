"""Core generation logic: drives every article of an outline to completion."""

from pathlib import Path
from typing import Optional

from llm_core import AsyncProviderClient, GenerationFailedError, is_failed_response
from loguru import logger

from .context import SOURCE_SEPARATOR, build_context
from .exceptions import ArticleGenerationError, ChapterSummaryError, NoOutlineError, SourceFileNotFoundError
from .models import ArticleStatus, GeneratedContent, Project, TemplatedProject
from .progress import ProgressCallback, ProgressReporter
from .prompts import build_article_prompt, build_article_summary_prompt, build_chapter_summary_prompt
from .state import StateStore, seed_from_outline
from .workspace import Workspace

# Articles in these states are not claimed by a run
_SKIPPED_STATUSES = (ArticleStatus.DONE, ArticleStatus.WRITING)


def load_source_text(project: TemplatedProject, project_dir: Path) -> str:
    """Read and join every source file of a templated project.

    Raises:
        SourceFileNotFoundError: If any declared source file is missing
    """
    texts = []
    for source in project.sources:
        path = project_dir / source
        if not path.is_file():
            raise SourceFileNotFoundError(project.name, path)
        texts.append(path.read_text(encoding="utf-8"))
    return SOURCE_SEPARATOR.join(texts)


class GenerationEngine:
    """Walks a project's outline in document order, one article at a time.

    Each pending or errored article is claimed (``writing``), written, summarized
    and marked ``done``; state is persisted after every transition so a crash
    loses at most the article in flight. When every article of a chapter is
    done the chapter itself is summarized. The first failure stops the run;
    the next run resumes from the first article that is not done.

    Articles are processed strictly sequentially because each prompt depends
    on the summaries of the articles and chapters completed before it.
    """

    def __init__(
        self,
        client: AsyncProviderClient,
        store: StateStore,
        workspace: Workspace,
        model: Optional[str] = None,
    ):
        self.client = client
        self.store = store
        self.workspace = workspace
        self.model = model

    async def run(
        self,
        project: Project,
        on_progress: Optional[ProgressCallback] = None,
    ) -> GeneratedContent:
        """
        Generate every article that is not yet done.

        Returns:
            The completed (or, on failure, partially completed) generation state

        Raises:
            NoOutlineError: If the project has no outline
            SourceFileNotFoundError: If a templated project's source is missing
            CorruptStateError: If stored state is invalid or diverges from the outline
            ArticleGenerationError: If an article could not be generated
            ChapterSummaryError: If a completed chapter could not be summarized
        """
        if project.outline is None:
            raise NoOutlineError(project.name)

        content = self.store.load_for_outline(project.name, project.outline)
        if content is None:
            content = seed_from_outline(project.outline)
            self.store.save(project.name, content)
            logger.info(f"Seeded generation state for project '{project.name}'")

        source_text = ""
        if isinstance(project, TemplatedProject):
            source_text = load_source_text(project, self.workspace.project_dir(project.name))

        reporter = ProgressReporter(
            total=content.article_count,
            done=content.count_status(ArticleStatus.DONE),
            callback=on_progress,
        )
        logger.info(
            f"Starting generation for '{project.name}': {reporter.done}/{reporter.total} articles already done"
        )

        for chapter_index, chapter in enumerate(content.chapters):
            for article_index, article in enumerate(chapter.articles):
                if article.status in _SKIPPED_STATUSES:
                    continue
                await self._generate_article(project, content, chapter_index, article_index, source_text, reporter)

            if chapter.summary is None and chapter.is_complete:
                await self._summarize_chapter(project, content, chapter_index)

        logger.info(f"Generation finished for '{project.name}' ({reporter.done}/{reporter.total} articles)")
        return content

    async def _generate_article(
        self,
        project: Project,
        content: GeneratedContent,
        chapter_index: int,
        article_index: int,
        source_text: str,
        reporter: ProgressReporter,
    ) -> None:
        """Claim, write, summarize and complete a single article."""
        chapter = content.chapters[chapter_index]
        article = chapter.articles[article_index]

        # Claim
        article.status = ArticleStatus.WRITING
        self.store.save(project.name, content)
        reporter.claimed(chapter.title, article.title)
        logger.info(f"Writing article '{article.title}' ({chapter.title})")

        try:
            context = build_context(project, content, chapter_index, article_index, source_text)
            body = await self._generate(build_article_prompt(context))
            summary = await self._generate(build_article_summary_prompt(body))

            article.content = body
            article.summary = summary
            article.status = ArticleStatus.DONE
            self.store.save(project.name, content)

        except Exception as e:
            logger.error(f"Article '{article.title}' failed: {type(e).__name__}: {e}")
            self._mark_failed(project, content, chapter_index, article_index)
            raise ArticleGenerationError(project.name, chapter.title, article.title, str(e)) from e
        except BaseException:
            # Cancelled or interrupted mid-write; keep the article retryable
            logger.warning(f"Article '{article.title}' interrupted")
            self._mark_failed(project, content, chapter_index, article_index)
            raise

        reporter.completed(chapter.title, article.title)

    def _mark_failed(self, project: Project, content: GeneratedContent, chapter_index: int, article_index: int) -> None:
        article = content.chapters[chapter_index].articles[article_index]
        article.content = None
        article.summary = None
        article.status = ArticleStatus.ERROR
        self.store.save(project.name, content)

    async def _summarize_chapter(self, project: Project, content: GeneratedContent, chapter_index: int) -> None:
        """Summarize a chapter whose articles are all done."""
        chapter = content.chapters[chapter_index]
        logger.info(f"Summarizing chapter '{chapter.title}'")

        try:
            chapter.summary = await self._generate(build_chapter_summary_prompt(chapter))
            self.store.save(project.name, content)
        except Exception as e:
            logger.error(f"Chapter summary for '{chapter.title}' failed: {type(e).__name__}: {e}")
            chapter.summary = None
            raise ChapterSummaryError(project.name, chapter.title, str(e)) from e

    async def _generate(self, messages: list[dict]) -> str:
        """Call the generation service, rejecting empty or error-marker responses."""
        text = await self.client.generate(messages, model=self.model)
        if is_failed_response(text):
            raise GenerationFailedError("Generation service returned an empty or error response", self.model)
        return text
