"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import subprocess
import threading
from pathlib import Path

import pytest

from podscribe.config import PodscribeConfig
from podscribe.exceptions import LLMError, TranscriptionError


def chunk_index(audio_path: Path) -> int:
    """Index encoded in a chunk file name such as chunk-003.mp3."""
    return int(Path(audio_path).stem.split("-")[1]) - 1


class FakeClient:
    """Stand-in for LLMClient with scripted per-chunk behavior."""

    def __init__(
        self,
        segments: dict[int, list[dict]] | None = None,
        fail_chunks: set[int] | None = None,
        format_failures: set[str] | None = None,
        texts: dict[int, str] | None = None,
    ) -> None:
        self.texts = texts or {}
        self.segments = segments or {}
        self.fail_chunks = fail_chunks or set()
        self.format_failures = format_failures or set()
        self.transcribe_calls: list[dict] = []
        self.complete_calls: list[dict] = []
        self._lock = threading.Lock()

    def transcribe(self, audio_path, language=None, prompt=None, timestamps=False):
        index = chunk_index(audio_path)
        with self._lock:
            self.transcribe_calls.append(
                {
                    "index": index,
                    "path": Path(audio_path),
                    "language": language,
                    "prompt": prompt,
                    "timestamps": timestamps,
                }
            )
        if index in self.fail_chunks:
            raise TranscriptionError(f"Transcription of chunk {index + 1} failed: 500")
        segments = self.segments.get(index, []) if timestamps else []
        text = self.texts.get(index, f"chunk {index} text")
        return {"text": text, "segments": segments}

    def complete(self, prompt, system=None, max_tokens=None, temperature=None):
        raw = prompt.split("\n\n", 1)[-1]
        with self._lock:
            self.complete_calls.append({"prompt": prompt, "system": system, "raw": raw})
        if raw in self.format_failures:
            raise LLMError("LLM request failed: rate limited")
        return f"Formatted {raw}."


def fake_ffmpeg_run(cmd, capture_output=True, text=True, **kwargs):
    """subprocess.run replacement that writes the output file ffmpeg would."""
    Path(cmd[-1]).write_bytes(b"chunk audio")
    return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Base directory for pipeline workspaces."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def config(work_dir: Path) -> PodscribeConfig:
    return PodscribeConfig(api_key="test-key", temp_dir=work_dir)


@pytest.fixture
def source_audio(tmp_path: Path) -> Path:
    path = tmp_path / "episode.mp3"
    path.write_bytes(b"fake mp3 content")
    return path


@pytest.fixture
def fake_media(monkeypatch: pytest.MonkeyPatch):
    """Patch ffprobe/ffmpeg: 650s of audio, splitting always succeeds.

    Returns a dict whose "duration" can be changed before the run.
    """
    state = {"duration": 650.0}

    def fake_probe(path):
        return state["duration"]

    monkeypatch.setattr("podscribe.transcribe.pipeline.probe_duration", fake_probe)
    monkeypatch.setattr("podscribe.media.chunks.subprocess.run", fake_ffmpeg_run)
    return state


@pytest.fixture
def make_client():
    """Factory for FakeClient with custom segments or failures."""
    return FakeClient
