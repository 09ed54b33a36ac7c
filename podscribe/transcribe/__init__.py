"""
podscribe.transcribe - Chunked parallel transcription.

Per-chunk recognition, the bounded-concurrency scheduler, ordered result
assembly, and the pipeline entry points that tie the stages together.
"""

from __future__ import annotations
