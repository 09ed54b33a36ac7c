"""
podscribe.export.timecode - SRT timestamp math.
"""

from __future__ import annotations


def seconds_to_srt_timestamp(seconds: float) -> str:
    """Convert float seconds to an SRT timestamp.

    The value is rounded to the nearest millisecond before it is split into
    fields, so a fraction that rounds up to 1000 ms carries into the seconds
    (3661.9996 -> 01:01:02,000) instead of rendering as ",1000".

    Args:
        seconds: Time in seconds; negative values clamp to zero

    Returns:
        Timestamp string in HH:MM:SS,mmm format
    """
    total_ms = max(0, round(seconds * 1000))

    hh, rem = divmod(total_ms, 3_600_000)
    mm, rem = divmod(rem, 60_000)
    ss, ms = divmod(rem, 1000)

    return f"{hh:02d}:{mm:02d}:{ss:02d},{ms:03d}"
