"""
podscribe.llm.formatting - Readability pass over raw chunk transcripts.

Adds punctuation and capitalization without changing wording. Only used for
plain-text runs; subtitle runs keep the recognition output untouched.
"""

from __future__ import annotations

from typing import Any

from podscribe.exceptions import FormattingError, LLMError
from podscribe.llm.templates import PromptTemplateManager, default_templates
from podscribe.transcribe.language import is_chinese, language_name


def build_format_prompts(
    text: str,
    language: str | None,
    templates: PromptTemplateManager | None = None,
) -> tuple[str, str]:
    """Render the (system, user) prompt pair for the formatting pass."""
    templates = templates or default_templates()
    chinese = is_chinese(language)

    if chinese:
        system = templates.render("format_system_zh.txt", {})
    else:
        system = templates.render("format_system.txt", {"LANGUAGE_NAME": language_name(language)})

    user = templates.render("format_user.txt", {"CHINESE": chinese, "TRANSCRIPT": text})
    return system, user


def format_readable(
    client: Any,
    text: str,
    language: str | None = None,
    templates: PromptTemplateManager | None = None,
) -> str:
    """Ask the chat model to punctuate a raw transcript.

    Args:
        client: LLMClient instance
        text: Raw transcript text
        language: Language setting ("auto" or a code)
        templates: Prompt templates (built-in prompts by default)

    Returns:
        Formatted text

    Raises:
        FormattingError: If the request fails or returns nothing
    """
    system, user = build_format_prompts(text, language, templates)

    try:
        formatted = client.complete(user, system=system)
    except LLMError as e:
        raise FormattingError(f"Formatting pass failed: {e}") from e

    if not formatted or not formatted.strip():
        raise FormattingError("Formatting pass returned no text")

    return formatted.strip()
