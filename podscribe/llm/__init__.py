"""
podscribe.llm - Remote speech-recognition and text-generation calls.

The client wraps litellm for both audio transcription and chat
completion; the readability formatting pass and the optional summary are
built on top of it.
"""

from __future__ import annotations
