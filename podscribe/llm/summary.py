"""
podscribe.llm.summary - Structured summary of a finished transcript.
"""

from __future__ import annotations

from typing import Any

from podscribe.exceptions import LLMResponseError
from podscribe.llm.templates import PromptTemplateManager, default_templates
from podscribe.logging import logger
from podscribe.transcribe.language import language_name


def generate_summary(
    client: Any,
    transcript: str,
    language: str | None = None,
    templates: PromptTemplateManager | None = None,
) -> str:
    """Summarize a transcript into overview, key points, insights, quotes and context.

    Args:
        client: LLMClient instance
        transcript: Full transcript text
        language: Language setting; a known language names the summary language
        templates: Prompt templates (built-in prompts by default)

    Returns:
        Summary text

    Raises:
        LLMError: If the request fails
        LLMResponseError: If no summary was generated
    """
    templates = templates or default_templates()
    system = templates.render("summary_system.txt", {"LANGUAGE_NAME": language_name(language)})

    logger.info("Starting summary generation")
    summary = client.complete(transcript, system=system, max_tokens=1000, temperature=0.7)

    if not summary or not summary.strip():
        raise LLMResponseError("No summary generated")

    logger.info("Generated summary (%d chars)", len(summary))
    return summary.strip()
