"""
podscribe.export - Output rendering.

SRT timestamps and blocks, and the text/json/markdown/srt output formats
written by the CLI.
"""

from __future__ import annotations
