"""
podscribe.media - FFmpeg-backed media handling.

Probes the source duration, plans fixed-length chunks, cuts them into a
scoped temporary workspace, and removes that workspace when the run ends.
"""

from __future__ import annotations
