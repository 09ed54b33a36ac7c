"""
podscribe.media.chunks - Chunk planning and FFmpeg splitting.

Planning is pure arithmetic and can be tested without FFmpeg. Splitting
runs once per chunk, sequentially, before any transcription starts.
"""

from __future__ import annotations

import math
import subprocess
from pathlib import Path

from podscribe.exceptions import ConfigError, SplitError
from podscribe.logging import logger
from podscribe.models import ChunkArtifact, ChunkDescriptor

DEFAULT_CHUNK_DURATION = 300.0

# Final chunks shorter than this are likely to fail recognition.
SHORT_TAIL_SECONDS = 1.0


def plan_chunks(
    total_duration: float,
    chunk_duration: float = DEFAULT_CHUNK_DURATION,
) -> list[ChunkDescriptor]:
    """Plan contiguous chunks covering [0, total_duration).

    Every chunk is chunk_duration long except the last, which ends exactly
    at total_duration.

    Args:
        total_duration: Length of the source audio in seconds
        chunk_duration: Target chunk length in seconds

    Returns:
        Descriptors ordered by index, indices 0..N-1

    Raises:
        ConfigError: If either duration is not a positive finite number
    """
    if not math.isfinite(chunk_duration) or chunk_duration <= 0:
        raise ConfigError(f"chunk_duration must be positive, got {chunk_duration}")
    if not math.isfinite(total_duration) or total_duration <= 0:
        raise ConfigError(f"total_duration must be positive, got {total_duration}")

    count = math.ceil(total_duration / chunk_duration)
    descriptors = []
    for index in range(count):
        start = index * chunk_duration
        if start >= total_duration:
            break
        duration = min(chunk_duration, total_duration - start)
        descriptors.append(ChunkDescriptor(index=index, start=start, duration=duration))

    tail = descriptors[-1]
    if len(descriptors) > 1 and tail.duration < SHORT_TAIL_SECONDS:
        logger.warning(
            "Final chunk %d is only %.4fs long (total %.4fs); recognition may fail",
            tail.index + 1,
            tail.duration,
            total_duration,
        )
    return descriptors


def chunk_filename(descriptor: ChunkDescriptor, suffix: str) -> str:
    """File name for a chunk, numbered from 1."""
    return f"chunk-{descriptor.index + 1:03d}{suffix}"


def split_chunks(
    source: Path,
    descriptors: list[ChunkDescriptor],
    workspace: Path,
) -> list[ChunkArtifact]:
    """Cut every planned chunk out of source into workspace.

    Streams are copied, not re-encoded, so each chunk keeps the source
    container and codec.

    Args:
        source: Source audio file
        descriptors: Planned chunks
        workspace: Directory that receives the chunk files

    Returns:
        One artifact per descriptor, in descriptor order

    Raises:
        SplitError: If FFmpeg is missing or fails for any chunk
    """
    suffix = source.suffix or ".mp3"
    artifacts = []

    for descriptor in descriptors:
        dest = workspace / chunk_filename(descriptor, suffix)
        split_chunk(source, descriptor, dest)
        artifacts.append(ChunkArtifact(descriptor=descriptor, path=dest))

    logger.info("Split %s into %d chunks", source.name, len(artifacts))
    return artifacts


def split_chunk(source: Path, descriptor: ChunkDescriptor, dest: Path) -> None:
    """Extract one chunk with FFmpeg stream copy."""
    cmd = [
        "ffmpeg",
        "-y",
        "-v",
        "error",
        "-ss",
        f"{descriptor.start:.3f}",
        "-i",
        str(source),
        "-t",
        f"{descriptor.duration:.3f}",
        "-c",
        "copy",
        str(dest),
    ]

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise SplitError("ffmpeg not found in PATH") from e
    except OSError as e:
        raise SplitError(f"ffmpeg could not be started: {e}") from e

    if proc.returncode != 0:
        raise SplitError(
            f"FFmpeg failed on chunk {descriptor.index + 1}: {proc.stderr.strip() or 'unknown error'}"
        )
    if not dest.exists():
        raise SplitError(f"FFmpeg produced no output for chunk {descriptor.index + 1}")

    logger.debug(
        "Chunk %d: %.3fs-%.3fs -> %s",
        descriptor.index,
        descriptor.start,
        descriptor.end,
        dest.name,
    )
