"""
podscribe.models - Data passed between pipeline stages.

Chunk descriptors and artifacts are frozen once created; results and
subtitle entries only live for the duration of a single run.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ChunkDescriptor(BaseModel):
    """A time range of the source audio, in source time."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    start: float = Field(ge=0.0)
    duration: float = Field(gt=0.0)

    @property
    def end(self) -> float:
        return self.start + self.duration


class ChunkArtifact(BaseModel):
    """A standalone audio file holding one planned chunk."""

    model_config = ConfigDict(frozen=True)

    descriptor: ChunkDescriptor
    path: Path

    @property
    def index(self) -> int:
        return self.descriptor.index


class TranscriptSegment(BaseModel):
    """Time-aligned recognition output, in chunk-local time."""

    start: float
    end: float
    text: str


class SubtitleEntry(BaseModel):
    """One subtitle block in global time and global numbering."""

    sequence: int = Field(ge=1)
    start: float
    end: float
    text: str


class ChunkResult(BaseModel):
    """Recognition result for one chunk.

    segments is None for plain-text runs.
    """

    index: int = Field(ge=0)
    text: str
    segments: list[TranscriptSegment] | None = None


class PipelineOutput(BaseModel):
    """Final result of a run."""

    model_config = ConfigDict(frozen=True)

    text: str
    subtitles: str | None = None
