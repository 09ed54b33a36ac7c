"""
podscribe.export.formats - Final output rendering for the CLI.
"""

from __future__ import annotations

import json
from typing import Any

SUMMARY_BANNER = "========== SUMMARY =========="


def format_output(
    transcript: str,
    summary: str | None,
    output_format: str,
    subtitles: str | None = None,
) -> str:
    """Render the transcript (and optional summary) in the requested format.

    Args:
        transcript: Merged transcript text
        summary: Optional generated summary
        output_format: One of text, json, markdown, srt
        subtitles: SRT document, used by the srt and json formats

    Returns:
        Rendered output string
    """
    if output_format == "srt":
        return subtitles or ""

    if output_format == "json":
        data: dict[str, Any] = {"transcript": transcript}
        if summary:
            data["summary"] = summary
        if subtitles:
            data["srt"] = subtitles
        return json.dumps(data, indent=2, ensure_ascii=False)

    if output_format == "markdown":
        md = f"# Transcription\n\n{transcript}"
        if summary:
            md += f"\n\n---\n\n# Summary\n\n{summary}"
        return md

    text = transcript
    if summary:
        text += f"\n\n{SUMMARY_BANNER}\n\n{summary}"
    return text
