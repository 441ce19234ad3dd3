"""Prompt templates for LLM generation."""

from llm_core import human_message, system_message

from .models import GeneratedChapter, Idea

# =============================================================================
# Outline generation
# =============================================================================

OUTLINE_SYSTEM_PROMPT = """You are an expert outline generator. Based on the provided idea, \
create a detailed outline for a {project_type}. \
The outline should be structured with chapters and articles within each chapter. \
Provide the output as a JSON object that strictly follows this JSON schema:
{schema}
Do not include any other text or explanations in your response, only the raw JSON object."""

OUTLINE_HUMAN_PROMPT = """Here is the idea for the {project_type}:
Language: {language}
Summary: {summary}
Global Requirements: {prompt}"""

EXTRACT_OUTLINE_SYSTEM_PROMPT = """You are an expert document parser. Analyze the provided text \
and identify its structure. \
Extract the main sections (chapters) and subsections (articles) based on the headings. \
Provide the output as a JSON object that strictly follows this JSON schema:
{schema}
Do not include any other text or explanations in your response, only the raw JSON object. \
Typically, ## headings are chapters and ### headings are articles."""

# =============================================================================
# Content generation
# =============================================================================

ARTICLE_SYSTEM_PROMPT = (
    "You are an expert author. Write the full, detailed content for the following article "
    "based on the provided context. Focus only on the article content, not the title or summary."
)

ARTICLE_SUMMARY_SYSTEM_PROMPT = (
    "You are an expert summarizer. Summarize the following text in one or two paragraphs."
)

CHAPTER_SUMMARY_SYSTEM_PROMPT = (
    "You are an expert summarizer. Based on the following article summaries, "
    "write a concise summary for the entire chapter."
)


def build_outline_prompt(project_type: str, idea: Idea, schema: str) -> list[dict]:
    """Build the messages array asking for an outline of a book or series."""
    return [
        system_message(OUTLINE_SYSTEM_PROMPT.format(project_type=project_type, schema=schema)),
        human_message(
            OUTLINE_HUMAN_PROMPT.format(
                project_type=project_type,
                language=idea.language,
                summary=idea.summary,
                prompt=idea.prompt,
            )
        ),
    ]


def build_extract_outline_prompt(template_text: str, schema: str) -> list[dict]:
    """Build the messages array extracting an outline from a template document."""
    return [
        system_message(EXTRACT_OUTLINE_SYSTEM_PROMPT.format(schema=schema)),
        human_message(template_text),
    ]


def build_article_prompt(context: str) -> list[dict]:
    """Build the messages array for writing one article."""
    return [
        system_message(ARTICLE_SYSTEM_PROMPT),
        human_message(context),
    ]


def build_article_summary_prompt(article_content: str) -> list[dict]:
    """Build the messages array for summarizing a written article."""
    return [
        system_message(ARTICLE_SUMMARY_SYSTEM_PROMPT),
        human_message(article_content),
    ]


def format_chapter_digest(chapter: GeneratedChapter) -> str:
    """Join the title and summary of every article in the chapter."""
    return "\n\n".join(f"Article: {article.title}\nSummary: {article.summary or ''}" for article in chapter.articles)


def build_chapter_summary_prompt(chapter: GeneratedChapter) -> list[dict]:
    """Build the messages array for summarizing a completed chapter."""
    return [
        system_message(CHAPTER_SUMMARY_SYSTEM_PROMPT),
        human_message(format_chapter_digest(chapter)),
    ]
