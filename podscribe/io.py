"""
podscribe.io - Atomic file writes for transcript output.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def write_text(path: Path, content: str) -> None:
    """Write text file atomically.

    Writes to a temp file first, then renames so an interrupted run never
    leaves a truncated transcript behind.

    Args:
        path: Destination path
        content: Text content to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        delete=False,
        suffix=".tmp",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    tmp_path.replace(path)
