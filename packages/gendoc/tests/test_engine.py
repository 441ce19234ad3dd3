"""Tests for gendoc engine module."""

import asyncio

import pytest
from gendoc.engine import GenerationEngine
from gendoc.exceptions import ArticleGenerationError, ChapterSummaryError, NoOutlineError, SourceFileNotFoundError
from gendoc.models import ArticleStatus, BookProject, Outline
from gendoc.progress import ProgressStage
from gendoc.state import seed_from_outline

SINGLE_CHAPTER_OUTLINE = {
    "title": "T",
    "chapters": [{"title": "C1", "articles": [{"title": "A1"}, {"title": "A2"}]}],
}


@pytest.fixture
def single_chapter_project(idea):
    return BookProject(name="tea", idea=idea, outline=Outline.model_validate(SINGLE_CHAPTER_OUTLINE))


def run_engine(client, store, workspace, project, events=None):
    engine = GenerationEngine(client, store, workspace)
    callback = events.append if events is not None else None
    return asyncio.run(engine.run(project, callback))


def statuses(content):
    return [[article.status for article in chapter.articles] for chapter in content.chapters]


class TestScenarios:
    """End-to-end engine scenarios on a one-chapter outline."""

    def test_successful_run(self, make_client, store, workspace, single_chapter_project):
        """A first run seeds state, completes every article and summarizes the chapter."""
        client = make_client()
        events = []

        content = run_engine(client, store, workspace, single_chapter_project, events)

        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.DONE]]
        assert content.chapters[0].articles[0].content == "Body 1"
        assert content.chapters[0].articles[0].summary == "Summary 2"
        assert content.chapters[0].articles[1].content == "Body 3"
        assert content.chapters[0].summary == "Chapter summary 5"
        assert client.kinds() == ["article", "summary", "article", "summary", "chapter"]
        assert (events[-1].done, events[-1].total) == (2, 2)
        assert store.load("tea") == content

    def test_failure_on_second_article(self, make_client, store, workspace, single_chapter_project):
        """A service failure on the second article stops the run and marks it error."""
        client = make_client(fail_on={3})

        with pytest.raises(ArticleGenerationError) as exc_info:
            run_engine(client, store, workspace, single_chapter_project)

        assert exc_info.value.article_title == "A2"
        assert exc_info.value.chapter_title == "C1"
        content = store.load("tea")
        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.ERROR]]
        assert content.chapters[0].articles[1].content is None
        assert content.chapters[0].articles[1].summary is None
        assert content.chapters[0].summary is None

    def test_rerun_after_failure(self, make_client, store, workspace, single_chapter_project):
        """Re-running after a failure processes only the errored article, then summarizes."""
        with pytest.raises(ArticleGenerationError):
            run_engine(make_client(fail_on={3}), store, workspace, single_chapter_project)

        client = make_client()
        content = run_engine(client, store, workspace, single_chapter_project)

        assert client.kinds() == ["article", "summary", "chapter"]
        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.DONE]]
        assert content.chapters[0].articles[0].content == "Body 1"
        assert content.chapters[0].articles[1].content == "Body 1"
        assert content.chapters[0].summary == "Chapter summary 3"


class TestResume:
    """Tests for resuming partially generated state."""

    def test_only_pending_and_error_articles_processed(self, make_client, store, workspace, book_project, outline):
        """Done articles are never regenerated; the rest run in outline order."""
        content = seed_from_outline(outline)
        first = content.chapters[0].articles[0]
        first.status = ArticleStatus.DONE
        first.content = "kept"
        first.summary = "kept summary"
        content.chapters[0].articles[1].status = ArticleStatus.ERROR
        store.save("tea", content)
        client = make_client()

        result = run_engine(client, store, workspace, book_project)

        assert client.kinds() == ["article", "summary", "chapter", "article", "summary", "chapter"]
        assert 'writing the article "A2"' in client.calls[0][1]["content"]
        assert 'writing the article "B1"' in client.calls[3][1]["content"]
        assert result.chapters[0].articles[0].content == "kept"

    def test_writing_articles_are_skipped(self, make_client, store, workspace, book_project, outline):
        """An article claimed by another run is left alone and blocks its chapter summary."""
        content = seed_from_outline(outline)
        content.chapters[1].articles[0].status = ArticleStatus.WRITING
        store.save("tea", content)
        client = make_client()

        result = run_engine(client, store, workspace, book_project)

        assert client.kinds() == ["article", "summary", "article", "summary", "chapter"]
        assert result.chapters[1].articles[0].status == ArticleStatus.WRITING
        assert result.chapters[1].summary is None

    def test_completed_project_makes_no_calls(self, make_client, store, workspace, book_project):
        """A second run over finished state does nothing."""
        run_engine(make_client(), store, workspace, book_project)
        client = make_client()

        run_engine(client, store, workspace, book_project)

        assert client.call_count == 0


class TestProgress:
    """Tests for progress reporting during a run."""

    def test_event_sequence(self, make_client, store, workspace, single_chapter_project):
        """Each article emits a claimed then a completed event, in order."""
        events = []

        run_engine(make_client(), store, workspace, single_chapter_project, events)

        assert [(e.stage, e.current_title, e.done) for e in events] == [
            (ProgressStage.CLAIMED, "A1", 0),
            (ProgressStage.COMPLETED, "A1", 1),
            (ProgressStage.CLAIMED, "A2", 1),
            (ProgressStage.COMPLETED, "A2", 2),
        ]
        assert all(e.chapter_title == "C1" and e.total == 2 for e in events)

    def test_done_matches_persisted_state(self, make_client, store, workspace, book_project):
        """The reported done count never decreases and always equals the persisted count."""
        observed = []

        def on_progress(event):
            persisted = store.load("tea").count_status(ArticleStatus.DONE)
            observed.append((event.done, persisted))

        engine = GenerationEngine(make_client(), store, workspace)
        asyncio.run(engine.run(book_project, on_progress))

        dones = [done for done, _ in observed]
        assert dones == sorted(dones)
        assert all(done == persisted for done, persisted in observed)

    def test_resumed_run_starts_from_done_count(self, make_client, store, workspace, book_project, outline):
        """Progress of a resumed run starts at the number of already done articles."""
        content = seed_from_outline(outline)
        content.chapters[0].articles[0].status = ArticleStatus.DONE
        store.save("tea", content)
        events = []

        run_engine(make_client(), store, workspace, book_project, events)

        assert events[0].done == 1
        assert events[-1].done == 3

    def test_claimed_state_is_persisted(self, make_client, store, workspace, single_chapter_project):
        """The article is saved as writing before generation starts."""
        seen = []

        def on_progress(event):
            if event.stage == ProgressStage.CLAIMED:
                article = store.load("tea").chapters[0].articles[event.done]
                seen.append(article.status)

        engine = GenerationEngine(make_client(), store, workspace)
        asyncio.run(engine.run(single_chapter_project, on_progress))

        assert seen == [ArticleStatus.WRITING, ArticleStatus.WRITING]


class TestChapterSummaries:
    """Tests for chapter summary gating."""

    def test_summary_only_for_complete_chapters(self, make_client, store, workspace, book_project):
        """A failure in the second chapter leaves only the first chapter summarized."""
        with pytest.raises(ArticleGenerationError):
            run_engine(make_client(fail_on={6}), store, workspace, book_project)

        content = store.load("tea")
        assert content.chapters[0].summary == "Chapter summary 5"
        assert content.chapters[1].summary is None
        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.DONE], [ArticleStatus.ERROR]]

    def test_chapter_summary_prompt_lists_article_summaries(self, make_client, store, workspace, single_chapter_project):
        """The chapter summary is requested from the article titles and summaries."""
        client = make_client()

        run_engine(client, store, workspace, single_chapter_project)

        assert client.calls[4][1]["content"] == "Article: A1\nSummary: Summary 2\n\nArticle: A2\nSummary: Summary 4"

    def test_chapter_summary_failure(self, make_client, store, workspace, single_chapter_project):
        """A failed chapter summary keeps the articles done and is retried next run."""
        with pytest.raises(ChapterSummaryError) as exc_info:
            run_engine(make_client(fail_on={5}), store, workspace, single_chapter_project)

        assert exc_info.value.chapter_title == "C1"
        content = store.load("tea")
        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.DONE]]
        assert content.chapters[0].summary is None

        client = make_client()
        content = run_engine(client, store, workspace, single_chapter_project)
        assert client.kinds() == ["chapter"]
        assert content.chapters[0].summary == "Chapter summary 1"


class TestFailures:
    """Tests for precondition and response failures."""

    def test_no_outline(self, make_client, store, workspace, idea):
        """A project without outline cannot be generated."""
        project = BookProject(name="tea", idea=idea)

        with pytest.raises(NoOutlineError):
            run_engine(make_client(), store, workspace, project)

    def test_blank_response_marks_error(self, make_client, store, workspace, single_chapter_project):
        """An empty response counts as a failed article."""

        class BlankClient(make_client):
            async def generate(self, messages, model=None):
                await super().generate(messages, model)
                return "   "

        client = BlankClient()
        with pytest.raises(ArticleGenerationError):
            run_engine(client, store, workspace, single_chapter_project)

        assert client.call_count == 1
        assert statuses(store.load("tea")) == [[ArticleStatus.ERROR, ArticleStatus.PENDING]]

    def test_error_chains_cause(self, make_client, store, workspace, single_chapter_project):
        """The article error keeps the service error as its cause."""
        with pytest.raises(ArticleGenerationError) as exc_info:
            run_engine(make_client(fail_on={1}), store, workspace, single_chapter_project)

        assert "scripted failure" in str(exc_info.value.__cause__)

    def test_unexpected_exception_is_retried(self, make_client, store, workspace, single_chapter_project):
        """A non-service exception fails the article like any other error, and the next run retries it."""

        class BrokenClient(make_client):
            async def generate(self, messages, model=None):
                await super().generate(messages, model)
                if self.call_count == 3:
                    raise RuntimeError("client bug")
                return f"Text {self.call_count}"

        with pytest.raises(ArticleGenerationError) as exc_info:
            run_engine(BrokenClient(), store, workspace, single_chapter_project)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert statuses(store.load("tea")) == [[ArticleStatus.DONE, ArticleStatus.ERROR]]

        content = run_engine(make_client(), store, workspace, single_chapter_project)

        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.DONE]]
        assert content.chapters[0].summary is not None

    def test_cancellation_leaves_article_retryable(self, make_client, store, workspace, single_chapter_project):
        """A run cancelled mid-article does not leave the article in writing."""

        class CancelledClient(make_client):
            async def generate(self, messages, model=None):
                await super().generate(messages, model)
                raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            run_engine(CancelledClient(), store, workspace, single_chapter_project)

        assert statuses(store.load("tea")) == [[ArticleStatus.ERROR, ArticleStatus.PENDING]]

    def test_unexpected_chapter_summary_exception(self, make_client, store, workspace, single_chapter_project):
        """A non-service exception during the chapter summary raises ChapterSummaryError."""

        class BrokenSummaryClient(make_client):
            async def generate(self, messages, model=None):
                text = await super().generate(messages, model)
                if self._kind(messages) == "chapter":
                    raise RuntimeError("client bug")
                return text

        with pytest.raises(ChapterSummaryError):
            run_engine(BrokenSummaryClient(), store, workspace, single_chapter_project)

        content = store.load("tea")
        assert statuses(content) == [[ArticleStatus.DONE, ArticleStatus.DONE]]
        assert content.chapters[0].summary is None


class TestTemplatedSources:
    """Tests for templated projects' source files."""

    def test_missing_source_fails_before_claiming(self, make_client, store, workspace, templated_project):
        """A missing source file fails the run before any article is touched."""
        client = make_client()
        project_dir = workspace.project_dir("report")
        (project_dir / "sources").mkdir(parents=True)
        (project_dir / "sources" / "a.md").write_text("alpha", encoding="utf-8")

        with pytest.raises(SourceFileNotFoundError) as exc_info:
            run_engine(client, store, workspace, templated_project)

        assert exc_info.value.path == project_dir / "sources" / "b.md"
        assert client.call_count == 0
        assert store.load("report").count_status(ArticleStatus.PENDING) == 3

    def test_sources_included_in_context(self, make_client, store, workspace, templated_project):
        """Every source file is read and joined into the article context."""
        client = make_client()
        sources = workspace.project_dir("report") / "sources"
        sources.mkdir(parents=True)
        (sources / "a.md").write_text("alpha", encoding="utf-8")
        (sources / "b.md").write_text("beta", encoding="utf-8")

        run_engine(client, store, workspace, templated_project)

        assert "alpha\n\n---\n\nbeta" in client.calls[0][1]["content"]
