"""
podscribe.media.workspace - Scoped temporary directory for chunk files.

The directory exists only inside the ``with`` block and is removed on every
exit path, including exceptions raised by the pipeline.
"""

from __future__ import annotations

import shutil
import tempfile
import uuid
from pathlib import Path
from types import TracebackType

from podscribe.logging import logger


class Workspace:
    """Uniquely named working directory removed when the block exits."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir
        self._path: Path | None = None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("Workspace is not active")
        return self._path

    def __enter__(self) -> Path:
        if self.base_dir is not None:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        prefix = f"podscribe-{uuid.uuid4().hex}-"
        self._path = Path(tempfile.mkdtemp(prefix=prefix, dir=self.base_dir))
        logger.info("Created workspace %s", self._path)
        return self._path

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        path, self._path = self._path, None
        if path is None:
            return
        try:
            shutil.rmtree(path)
            logger.info("Removed workspace %s", path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove workspace %s: %s", path, e)


def workspace(base_dir: Path | None = None) -> Workspace:
    """Workspace under base_dir, or the system temp dir when None."""
    return Workspace(Path(base_dir) if base_dir is not None else None)
