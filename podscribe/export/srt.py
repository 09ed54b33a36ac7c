"""
podscribe.export.srt - SRT subtitle rendering.
"""

from __future__ import annotations

from collections.abc import Iterable

from podscribe.export.timecode import seconds_to_srt_timestamp
from podscribe.models import SubtitleEntry


def format_srt_block(entry: SubtitleEntry) -> str:
    """Render one subtitle entry as an SRT block (without the blank separator)."""
    start = seconds_to_srt_timestamp(entry.start)
    end = seconds_to_srt_timestamp(entry.end)
    return f"{entry.sequence}\n{start} --> {end}\n{entry.text}\n"


def render_srt(entries: Iterable[SubtitleEntry]) -> str:
    """Render subtitle entries as an SRT document.

    Blocks are separated by a single blank line.
    """
    return "\n".join(format_srt_block(entry) for entry in entries)
