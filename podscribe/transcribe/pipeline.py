"""
podscribe.transcribe.pipeline - Pipeline entry points.

probe -> plan -> split -> bounded transcription -> ordered assembly, all
inside a scoped workspace that is removed however the run ends. Any chunk
failure fails the whole run; partial transcripts are never returned.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from podscribe.config import PodscribeConfig
from podscribe.exceptions import ConfigError
from podscribe.llm.client import create_client_from_config
from podscribe.logging import logger
from podscribe.media.chunks import plan_chunks, split_chunks
from podscribe.media.probe import probe_duration
from podscribe.media.workspace import workspace
from podscribe.models import PipelineOutput
from podscribe.transcribe.assemble import assemble
from podscribe.transcribe.engine import ChunkWorker
from podscribe.transcribe.scheduler import ProgressCallback, run_bounded
from podscribe.utils import format_duration

StatusCallback = Callable[[str], None]


def transcribe_file(
    source: Path,
    config: PodscribeConfig | None = None,
    *,
    client: Any = None,
    on_progress: ProgressCallback | None = None,
    on_status: StatusCallback | None = None,
) -> PipelineOutput:
    """Transcribe a local audio file.

    Args:
        source: Audio file path
        config: Run configuration (defaults when None)
        client: LLMClient to use; built from config when None
        on_progress: Called as (completed, total) after each chunk
        on_status: Called with human-readable stage messages

    Returns:
        PipelineOutput with the transcript and, for srt output, subtitles

    Raises:
        ConfigError: If the source is missing or settings are invalid
        ProbeError: If the duration cannot be determined
        SplitError: If a chunk cannot be cut
        TranscriptionError: If any chunk fails to transcribe
    """
    config = config or PodscribeConfig()
    source = Path(source)
    if not source.is_file():
        raise ConfigError(f"File not found: {source}")

    with workspace(config.temp_dir) as workdir:
        return _run(source, workdir, config, client, on_progress, on_status)


def transcribe_bytes(
    data: bytes,
    extension: str,
    config: PodscribeConfig | None = None,
    *,
    client: Any = None,
    on_progress: ProgressCallback | None = None,
    on_status: StatusCallback | None = None,
) -> PipelineOutput:
    """Transcribe in-memory audio, e.g. a downloaded file.

    The payload is written into the run's workspace first, so it is removed
    together with the chunk files.

    Args:
        data: Encoded audio bytes
        extension: Container extension, with or without the leading dot

    Returns:
        PipelineOutput
    """
    config = config or PodscribeConfig()
    if not data:
        raise ConfigError("Audio data is empty")
    suffix = extension if extension.startswith(".") else f".{extension}"

    with workspace(config.temp_dir) as workdir:
        input_path = workdir / f"input{suffix}"
        input_path.write_bytes(data)
        return _run(input_path, workdir, config, client, on_progress, on_status)


def _run(
    source: Path,
    workdir: Path,
    config: PodscribeConfig,
    client: Any,
    on_progress: ProgressCallback | None,
    on_status: StatusCallback | None,
) -> PipelineOutput:
    subtitles = config.wants_subtitles

    total_duration = probe_duration(source)
    descriptors = plan_chunks(total_duration, config.chunk_duration)

    logger.info(
        "Audio details: duration=%s chunks=%d format=%s concurrency=%d",
        format_duration(total_duration),
        len(descriptors),
        config.output_format,
        config.max_concurrency,
    )

    if on_status:
        on_status(f"Splitting audio into {len(descriptors)} chunks...")
    artifacts = split_chunks(source, descriptors, workdir)

    if client is None:
        client = create_client_from_config(config)
    worker = ChunkWorker(client, language=config.language, subtitles=subtitles)

    if on_status:
        on_status(f"Transcribing {len(artifacts)} chunks...")
    results = run_bounded(
        artifacts,
        worker,
        max_concurrency=config.max_concurrency,
        on_progress=on_progress,
    )

    output = assemble(results, descriptors, subtitles=subtitles)
    logger.info("Transcription complete: %d chars", len(output.text))
    return output
