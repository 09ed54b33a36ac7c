"""
podscribe.config - Config loading from .env files, YAML and the environment.

Resolution order, lowest precedence first: built-in defaults, YAML config
file, environment variables (including values loaded from .env files), and
finally explicit overrides such as CLI options.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from podscribe.exceptions import ConfigError

OUTPUT_FORMATS = {"text", "json", "markdown", "srt"}

ENV_OVERRIDES: dict[str, str] = {
    "API_KEY": "api_key",
    "BASE_URL": "base_url",
    "PODSCRIBE_TRANSCRIPTION_MODEL": "transcription_model",
    "PODSCRIBE_LLM_MODEL": "llm_model",
    "PODSCRIBE_LANGUAGE": "language",
    "PODSCRIBE_CHUNK_DURATION": "chunk_duration",
    "PODSCRIBE_CONCURRENCY": "max_concurrency",
    "PODSCRIBE_TIMEOUT": "request_timeout",
    "PODSCRIBE_TEMP_DIR": "temp_dir",
}


class PodscribeConfig(BaseModel):
    """Resolved configuration for a transcription run."""

    api_key: str | None = None
    base_url: str | None = None

    transcription_model: str = "whisper-1"
    llm_model: str = "gpt-3.5-turbo"

    language: str = "auto"
    output_format: str = "text"

    chunk_duration: float = Field(default=300.0, gt=0.0)
    max_concurrency: int = Field(default=3, ge=1)
    request_timeout: float | None = Field(default=None, gt=0.0)

    temp_dir: Path | None = None

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        v = v.strip().lower()
        return v or "auto"

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of: {sorted(OUTPUT_FORMATS)}")
        return v

    @property
    def wants_subtitles(self) -> bool:
        return self.output_format == "srt"


def candidate_env_files(cwd: Path | None = None, home: Path | None = None) -> list[Path]:
    """List .env locations in lookup order."""
    cwd = cwd or Path.cwd()
    home = home or Path.home()
    return [
        cwd / ".env.local",
        cwd / ".env",
        home / ".podscribe" / ".env",
        home / ".config" / "podscribe" / ".env",
    ]


def load_env_files(cwd: Path | None = None, home: Path | None = None) -> list[Path]:
    """Load every existing .env file without overriding variables already set.

    Because nothing is overridden, the first file defining a key wins.

    Returns:
        Paths of the files that were loaded
    """
    loaded = []
    for path in candidate_env_files(cwd, home):
        if path.is_file():
            load_dotenv(path, override=False)
            loaded.append(path)
    return loaded


def find_config_file(cwd: Path | None = None, home: Path | None = None) -> Path | None:
    """Find the YAML config file, project-local first."""
    cwd = cwd or Path.cwd()
    home = home or Path.home()
    for path in (cwd / "podscribe.yaml", home / ".config" / "podscribe" / "config.yaml"):
        if path.is_file():
            return path
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a dict."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Pick config values out of environment variables."""
    return {field: env[key] for key, field in ENV_OVERRIDES.items() if env.get(key)}


def merge_config(overrides: dict[str, Any], base: dict[str, Any]) -> dict[str, Any]:
    """Merge overrides onto base. None values in overrides are ignored."""
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def build_config(values: dict[str, Any]) -> PodscribeConfig:
    """Validate raw values, raising ConfigError on failure."""
    try:
        return PodscribeConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    read_env_files: bool = True,
) -> PodscribeConfig:
    """Load and validate configuration.

    Args:
        config_path: Explicit YAML file; searched for when None
        env: Environment mapping (defaults to os.environ)
        read_env_files: Load .env files into os.environ first

    Returns:
        Validated PodscribeConfig

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    if read_env_files:
        load_env_files()

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        raw_config = read_config_file(config_path)
    else:
        found = find_config_file()
        raw_config = read_config_file(found) if found else {}

    merged = merge_config(env_overrides(os.environ if env is None else env), raw_config)
    return build_config(merged)


def apply_overrides(config: PodscribeConfig, **overrides: Any) -> PodscribeConfig:
    """Return a new validated config with the non-None overrides applied."""
    return build_config(merge_config(overrides, config.model_dump()))
