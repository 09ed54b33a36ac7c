"""
podscribe.media.probe - Audio duration probing with FFprobe.
"""

from __future__ import annotations

import math
import subprocess
from pathlib import Path

from podscribe.exceptions import ProbeError
from podscribe.logging import logger


def probe_duration(path: Path) -> float:
    """Return the duration of an audio file in seconds.

    Args:
        path: Local audio file

    Returns:
        Duration in seconds, always > 0

    Raises:
        ProbeError: If ffprobe is missing, fails, or reports no usable duration
    """
    cmd = [
        "ffprobe",
        "-v",
        "quiet",
        "-show_entries",
        "format=duration",
        "-of",
        "csv=p=0",
        str(path),
    ]

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ProbeError("ffprobe not found in PATH") from e
    except OSError as e:
        raise ProbeError(f"ffprobe could not be started: {e}") from e

    if proc.returncode != 0:
        raise ProbeError(f"ffprobe failed for {path}: {proc.stderr.strip() or 'unknown error'}")

    raw = proc.stdout.strip()
    try:
        duration = float(raw)
    except ValueError as e:
        raise ProbeError(f"Could not determine duration of {path} (ffprobe said {raw!r})") from e

    if not math.isfinite(duration) or duration <= 0:
        raise ProbeError(f"Invalid duration for {path}: {duration}")

    logger.debug("Probed %s: %.3fs", path, duration)
    return duration
