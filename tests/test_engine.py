"""Tests for podscribe.transcribe.engine module."""

from __future__ import annotations

from pathlib import Path

import pytest

from podscribe.exceptions import TranscriptionError
from podscribe.models import ChunkArtifact, ChunkDescriptor
from podscribe.transcribe.engine import ChunkWorker, transcribe_chunk


def _artifact(tmp_path: Path, index: int = 0) -> ChunkArtifact:
    return ChunkArtifact(
        descriptor=ChunkDescriptor(index=index, start=index * 300.0, duration=300.0),
        path=tmp_path / f"chunk-{index + 1:03d}.mp3",
    )


class TestTranscribeChunk:
    def test_text_run_is_formatted(self, tmp_path: Path, fake_client) -> None:
        result = transcribe_chunk(_artifact(tmp_path, 1), fake_client)
        assert result.index == 1
        assert result.text == "Formatted chunk 1 text."
        assert result.segments is None
        assert fake_client.transcribe_calls[0]["timestamps"] is False

    def test_formatting_failure_falls_back_to_raw_text(self, tmp_path: Path, make_client) -> None:
        client = make_client(format_failures={"chunk 0 text"})
        result = transcribe_chunk(_artifact(tmp_path, 0), client)
        assert result.text == "chunk 0 text"

    def test_subtitle_run_skips_formatting(self, tmp_path: Path, make_client) -> None:
        client = make_client(
            segments={0: [{"start": 0.0, "end": 1.5, "text": "  Hello there. "}]},
        )
        result = transcribe_chunk(_artifact(tmp_path, 0), client, subtitles=True)
        assert client.complete_calls == []
        assert client.transcribe_calls[0]["timestamps"] is True
        assert result.text == "chunk 0 text"
        assert len(result.segments) == 1
        assert result.segments[0].text == "Hello there."
        assert result.segments[0].end == 1.5

    @pytest.mark.parametrize("silence", ["", "  \n "])
    def test_silent_chunk_is_not_formatted(
        self, tmp_path: Path, make_client, silence: str
    ) -> None:
        client = make_client(texts={0: silence})
        result = transcribe_chunk(_artifact(tmp_path, 0), client)
        assert result.text == silence
        assert client.complete_calls == []

    def test_auto_language_is_unconstrained(self, tmp_path: Path, fake_client) -> None:
        transcribe_chunk(_artifact(tmp_path), fake_client, language="auto")
        call = fake_client.transcribe_calls[0]
        assert call["language"] is None
        assert call["prompt"] is None

    def test_chinese_variant_gets_prompt(self, tmp_path: Path, fake_client) -> None:
        transcribe_chunk(_artifact(tmp_path), fake_client, language="zh-CN")
        call = fake_client.transcribe_calls[0]
        assert call["language"] == "zh"
        assert call["prompt"] == "以下是普通话的句子。"

    def test_explicit_language_passed_through(
        self, tmp_path: Path, fake_client
    ) -> None:
        transcribe_chunk(_artifact(tmp_path), fake_client, language="en")
        assert fake_client.transcribe_calls[0]["language"] == "en"

    def test_transcription_failure_propagates(self, tmp_path: Path, make_client) -> None:
        client = make_client(fail_chunks={0})
        with pytest.raises(TranscriptionError):
            transcribe_chunk(_artifact(tmp_path), client)


class TestChunkWorker:
    def test_binds_settings(self, tmp_path: Path, make_client) -> None:
        client = make_client(segments={2: [{"start": 1.0, "end": 2.0, "text": "x"}]})
        worker = ChunkWorker(client, language="fr", subtitles=True)
        result = worker(_artifact(tmp_path, 2))
        assert result.index == 2
        assert client.transcribe_calls[0]["language"] == "fr"
        assert result.segments[0].start == 1.0
