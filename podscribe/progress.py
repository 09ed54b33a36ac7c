"""
podscribe.progress - Console progress reporting with rich.
"""

from __future__ import annotations

from rich.console import Console
from rich.status import Status

BAR_WIDTH = 20


def progress_bar(current: int, total: int, label: str = "") -> str:
    """Render a text progress bar, e.g. 'Transcribing [████░░…] 40% (2/5)'."""
    percentage = round(current / total * 100) if total else 100
    filled = round(percentage / (100 / BAR_WIDTH))
    bar = "█" * filled + "░" * (BAR_WIDTH - filled)
    return f"{label} [{bar}] {percentage}% ({current}/{total})".strip()


class ProgressReporter:
    """Spinner plus status lines on stderr; silent when quiet."""

    def __init__(self, console: Console | None = None, quiet: bool = False) -> None:
        self.console = console or Console(stderr=True)
        self.quiet = quiet
        self._status: Status | None = None

    def start(self, message: str) -> None:
        if self.quiet:
            return
        self.stop()
        self._status = self.console.status(message)
        self._status.start()

    def update(self, message: str) -> None:
        if self._status is not None:
            self._status.update(message)

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def succeed(self, message: str) -> None:
        self.stop()
        if not self.quiet:
            self.console.print(f"[green]✓[/green] {message}")

    def fail(self, message: str) -> None:
        self.stop()
        if not self.quiet:
            self.console.print(f"[red]✗[/red] {message}")

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[blue]i[/blue] {message}")

    def warn(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[yellow]![/yellow] {message}")

    def progress(self, current: int, total: int, label: str = "Transcribing") -> None:
        if not self.quiet:
            self.update(progress_bar(current, total, label))
