"""
Podscribe - chunked parallel transcription for long-form audio.

Splits audio into fixed-length chunks, transcribes them against a remote
speech-recognition service with bounded concurrency, and reassembles an
ordered transcript or SRT subtitle file.
"""

__version__ = "0.1.0"
