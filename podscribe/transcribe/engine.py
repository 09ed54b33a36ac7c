"""
podscribe.transcribe.engine - Transcription of a single chunk.

Plain-text runs get the readability formatting pass; subtitle runs request
time-aligned segments instead and are never reformatted, so timings and
wording stay exactly as recognized.
"""

from __future__ import annotations

from typing import Any

from podscribe.exceptions import FormattingError
from podscribe.llm.formatting import format_readable
from podscribe.logging import logger
from podscribe.models import ChunkArtifact, ChunkResult, TranscriptSegment
from podscribe.transcribe.language import language_prompt, normalize_language


def transcribe_chunk(
    artifact: ChunkArtifact,
    client: Any,
    language: str | None = "auto",
    subtitles: bool = False,
) -> ChunkResult:
    """Transcribe one chunk artifact.

    Args:
        artifact: Chunk file and its descriptor
        client: LLMClient instance
        language: Language setting ("auto" or a code)
        subtitles: Request time-aligned segments instead of formatted text

    Returns:
        ChunkResult for the chunk's index

    Raises:
        TranscriptionError: If the recognition request fails
    """
    index = artifact.index
    logger.info("Starting chunk %d", index + 1)

    response = client.transcribe(
        artifact.path,
        language=normalize_language(language),
        prompt=language_prompt(language),
        timestamps=subtitles,
    )

    if subtitles:
        segments = [
            TranscriptSegment(start=seg["start"], end=seg["end"], text=seg["text"].strip())
            for seg in response["segments"]
        ]
        logger.info("Finished chunk %d (%d segments)", index + 1, len(segments))
        return ChunkResult(index=index, text=response["text"], segments=segments)

    text = response["text"]
    if not text.strip():
        logger.info("Chunk %d: no speech recognized", index + 1)
        return ChunkResult(index=index, text=text)

    try:
        text = format_readable(client, text, language)
    except FormattingError as e:
        logger.warning("Chunk %d: %s; keeping unformatted text", index + 1, e)

    logger.info("Finished chunk %d", index + 1)
    return ChunkResult(index=index, text=text)


class ChunkWorker:
    """Callable binding client and run settings for the scheduler."""

    def __init__(self, client: Any, language: str | None = "auto", subtitles: bool = False) -> None:
        self.client = client
        self.language = language
        self.subtitles = subtitles

    def __call__(self, artifact: ChunkArtifact) -> ChunkResult:
        return transcribe_chunk(
            artifact,
            self.client,
            language=self.language,
            subtitles=self.subtitles,
        )
