"""
podscribe.transcribe.assemble - Ordered reassembly of chunk results.

Sorting by chunk index here is the only ordering step in the pipeline;
the scheduler's completion order never reaches the output.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from podscribe.exceptions import TranscriptionError
from podscribe.export.srt import render_srt
from podscribe.models import ChunkDescriptor, ChunkResult, PipelineOutput, SubtitleEntry


def sort_results(
    results: Iterable[ChunkResult],
    descriptors: Sequence[ChunkDescriptor],
) -> list[ChunkResult]:
    """Sort results by index and check there is exactly one per descriptor.

    Raises:
        TranscriptionError: If a chunk result is missing or duplicated
    """
    ordered = sorted(results, key=lambda r: r.index)
    indices = [r.index for r in ordered]
    expected = [d.index for d in sorted(descriptors, key=lambda d: d.index)]
    if indices != expected:
        missing = sorted(set(expected) - set(indices))
        raise TranscriptionError(
            f"Incomplete transcription: expected {len(expected)} chunk results, "
            f"got {len(indices)} (missing chunks {[i + 1 for i in missing]})"
        )
    return ordered


def merge_text(results: Sequence[ChunkResult]) -> str:
    """Join chunk texts with a single space, in the given order."""
    return " ".join(r.text for r in results)


def build_subtitle_entries(
    results: Sequence[ChunkResult],
    descriptors: Sequence[ChunkDescriptor],
) -> list[SubtitleEntry]:
    """Shift segments into global time and number them 1..M.

    Args:
        results: Chunk results sorted by index
        descriptors: Planned chunks, used for each chunk's start offset

    Returns:
        Subtitle entries in playback order
    """
    offsets = {d.index: d.start for d in descriptors}
    entries = []
    sequence = 1

    for result in results:
        offset = offsets[result.index]
        for seg in result.segments or []:
            entries.append(
                SubtitleEntry(
                    sequence=sequence,
                    start=seg.start + offset,
                    end=seg.end + offset,
                    text=seg.text,
                )
            )
            sequence += 1

    return entries


def assemble(
    results: Iterable[ChunkResult],
    descriptors: Sequence[ChunkDescriptor],
    subtitles: bool = False,
) -> PipelineOutput:
    """Build the final transcript (and SRT document) from unordered results.

    Args:
        results: Chunk results in any order
        descriptors: Planned chunks
        subtitles: Render SRT subtitles as well

    Returns:
        PipelineOutput

    Raises:
        TranscriptionError: If results do not cover every planned chunk
    """
    ordered = sort_results(results, descriptors)
    text = merge_text(ordered)

    srt = None
    if subtitles:
        srt = render_srt(build_subtitle_entries(ordered, descriptors))

    return PipelineOutput(text=text, subtitles=srt)
