"""Tests for podscribe.transcribe.pipeline module."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from podscribe.config import PodscribeConfig
from podscribe.exceptions import ConfigError, ProbeError, SplitError, TranscriptionError
from podscribe.transcribe.pipeline import transcribe_bytes, transcribe_file


class TestTranscribeFile:
    def test_text_run(self, source_audio, config, fake_media, fake_client, work_dir) -> None:
        progress = []
        statuses = []

        output = transcribe_file(
            source_audio,
            config,
            client=fake_client,
            on_progress=lambda done, total: progress.append((done, total)),
            on_status=statuses.append,
        )

        assert output.text == (
            "Formatted chunk 0 text. Formatted chunk 1 text. Formatted chunk 2 text."
        )
        assert output.subtitles is None
        assert progress == [(1, 3), (2, 3), (3, 3)]
        assert statuses[0] == "Splitting audio into 3 chunks..."
        assert list(work_dir.iterdir()) == []

    def test_subtitle_run(self, source_audio, work_dir, fake_media, make_client) -> None:
        client = make_client(
            segments={
                0: [{"start": 0.0, "end": 2.0, "text": "Intro"}],
                1: [],
                2: [
                    {"start": 10.5, "end": 12.0, "text": " Outro "},
                    {"start": 12.0, "end": 49.9996, "text": "Bye"},
                ],
            }
        )
        config = PodscribeConfig(output_format="srt", temp_dir=work_dir)

        output = transcribe_file(source_audio, config, client=client)

        assert client.complete_calls == []
        assert output.text == "chunk 0 text chunk 1 text chunk 2 text"
        assert output.subtitles == (
            "1\n00:00:00,000 --> 00:00:02,000\nIntro\n"
            "\n"
            "2\n00:10:10,500 --> 00:10:12,000\nOutro\n"
            "\n"
            "3\n00:10:12,000 --> 00:10:50,000\nBye\n"
        )

    def test_chunks_are_read_from_workspace(
        self, source_audio, config, fake_media, fake_client, work_dir
    ) -> None:
        transcribe_file(source_audio, config, client=fake_client)

        paths = sorted(call["path"] for call in fake_client.transcribe_calls)
        assert [p.name for p in paths] == ["chunk-001.mp3", "chunk-002.mp3", "chunk-003.mp3"]
        assert paths[0].parent.parent == work_dir
        assert not paths[0].parent.exists()

    def test_formatting_failure_only_affects_that_chunk(
        self, source_audio, config, fake_media, make_client
    ) -> None:
        client = make_client(format_failures={"chunk 1 text"})

        output = transcribe_file(source_audio, config, client=client)

        assert output.text == "Formatted chunk 0 text. chunk 1 text Formatted chunk 2 text."

    def test_chunk_failure_fails_run_and_cleans_up(
        self, source_audio, config, fake_media, make_client, work_dir
    ) -> None:
        client = make_client(fail_chunks={1})

        with pytest.raises(TranscriptionError, match="chunk 2"):
            transcribe_file(source_audio, config, client=client)

        assert list(work_dir.iterdir()) == []

    def test_probe_failure_cleans_up(
        self, source_audio, config, fake_client, work_dir, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing_probe(path):
            raise ProbeError("Could not determine duration")

        monkeypatch.setattr("podscribe.transcribe.pipeline.probe_duration", failing_probe)

        with pytest.raises(ProbeError):
            transcribe_file(source_audio, config, client=fake_client)

        assert fake_client.transcribe_calls == []
        assert list(work_dir.iterdir()) == []

    def test_split_failure_cleans_up(
        self, source_audio, config, fake_client, work_dir, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def failing_split(source, descriptors, workspace):
            (workspace / "chunk-001.mp3").write_bytes(b"partial")
            raise SplitError("FFmpeg failed on chunk 2")

        monkeypatch.setattr("podscribe.transcribe.pipeline.probe_duration", lambda p: 650.0)
        monkeypatch.setattr("podscribe.transcribe.pipeline.split_chunks", failing_split)

        with pytest.raises(SplitError):
            transcribe_file(source_audio, config, client=fake_client)

        assert fake_client.transcribe_calls == []
        assert list(work_dir.iterdir()) == []

    def test_language_routing(self, source_audio, work_dir, fake_media, fake_client) -> None:
        config = PodscribeConfig(language="Chinese", temp_dir=work_dir)

        transcribe_file(source_audio, config, client=fake_client)

        assert {c["language"] for c in fake_client.transcribe_calls} == {"zh"}
        assert all("中文" in c["system"] for c in fake_client.complete_calls)

    def test_custom_chunk_duration(self, source_audio, work_dir, fake_media, fake_client) -> None:
        config = PodscribeConfig(chunk_duration=100, max_concurrency=2, temp_dir=work_dir)

        output = transcribe_file(source_audio, config, client=fake_client)

        assert len(fake_client.transcribe_calls) == 7
        assert output.text.endswith("Formatted chunk 6 text.")

    def test_logs_audio_details(
        self, source_audio, config, fake_media, fake_client, caplog
    ) -> None:
        with caplog.at_level(logging.INFO, logger="podscribe"):
            transcribe_file(source_audio, config, client=fake_client)

        assert "Audio details: duration=10:50 chunks=3" in caplog.text

    def test_missing_source_raises_config_error(self, tmp_path: Path, config, fake_client) -> None:
        with pytest.raises(ConfigError, match="not found"):
            transcribe_file(tmp_path / "missing.mp3", config, client=fake_client)


class TestTranscribeBytes:
    def test_writes_payload_into_workspace(
        self, config, fake_media, fake_client, work_dir
    ) -> None:
        output = transcribe_bytes(b"downloaded audio", "m4a", config, client=fake_client)

        names = sorted(c["path"].name for c in fake_client.transcribe_calls)
        assert names == ["chunk-001.m4a", "chunk-002.m4a", "chunk-003.m4a"]
        assert output.text.startswith("Formatted chunk 0 text.")
        assert list(work_dir.iterdir()) == []

    def test_empty_payload_raises(self, config, fake_client) -> None:
        with pytest.raises(ConfigError):
            transcribe_bytes(b"", ".mp3", config, client=fake_client)
