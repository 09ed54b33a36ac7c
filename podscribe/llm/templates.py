"""
podscribe.llm.templates - Prompt template loading and rendering.

Uses Jinja2 to render the prompt templates shipped in podscribe/prompts/.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class PromptTemplateManager:
    """Manages loading and rendering of prompt templates."""

    def __init__(self, prompts_dir: Path = PROMPTS_DIR) -> None:
        self.prompts_dir = prompts_dir
        self.env = Environment(
            loader=FileSystemLoader(str(prompts_dir)),
            autoescape=False,
            keep_trailing_newline=False,
        )
        self._cache: dict[str, Template] = {}

    def get_template(self, name: str) -> Template:
        """Load a template by name.

        Raises:
            FileNotFoundError: If template doesn't exist
        """
        if name not in self._cache:
            template_path = self.prompts_dir / name
            if not template_path.exists():
                raise FileNotFoundError(f"Template not found: {template_path}")
            self._cache[name] = self.env.get_template(name)
        return self._cache[name]

    def render(self, template_name: str, variables: dict[str, Any]) -> str:
        """Render a template with variables."""
        template = self.get_template(template_name)
        return template.render(**variables).strip()


_default_manager: PromptTemplateManager | None = None


def default_templates() -> PromptTemplateManager:
    """Shared manager for the built-in prompts."""
    global _default_manager
    if _default_manager is None:
        _default_manager = PromptTemplateManager()
    return _default_manager
