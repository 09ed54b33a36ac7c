"""
podscribe.validation - Environment checks used by the doctor command.
"""

from __future__ import annotations

import shutil
import subprocess
from typing import Any

from podscribe.exceptions import DependencyError

FFMPEG_HINT = "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)"


def _binary_version(name: str) -> str:
    """Return the version reported by an FFmpeg-family binary.

    Raises:
        DependencyError: If the binary is not on PATH
    """
    path = shutil.which(name)
    if not path:
        raise DependencyError(name, f"{name} not found in PATH", FFMPEG_HINT)

    try:
        proc = subprocess.run([path, "-version"], capture_output=True, text=True, timeout=5)
        version_line = proc.stdout.split("\n")[0]
        return version_line.split()[2] if version_line else "unknown"
    except (subprocess.TimeoutExpired, IndexError, OSError):
        return "unknown"


def check_ffmpeg() -> dict[str, str]:
    """Check that ffmpeg and ffprobe are installed.

    Returns:
        Dict with 'ffmpeg_version' and 'ffprobe_version'

    Raises:
        DependencyError: If either binary is missing
    """
    return {
        "ffmpeg_version": _binary_version("ffmpeg"),
        "ffprobe_version": _binary_version("ffprobe"),
    }


def check_api_config(config: Any) -> dict[str, Any]:
    """Report whether the remote API is configured.

    Returns:
        Dict with 'configured', 'endpoint' and 'models'
    """
    return {
        "configured": bool(config.api_key),
        "endpoint": config.base_url or "default",
        "models": f"{config.transcription_model}, {config.llm_model}",
    }
