"""
podscribe.exceptions - Custom exception classes.

All Podscribe-specific exceptions inherit from PodscribeError.
"""


class PodscribeError(Exception):
    """Base exception for all Podscribe errors."""

    pass


class ConfigError(PodscribeError):
    """Invalid configuration or pipeline input."""

    pass


class ProbeError(PodscribeError):
    """FFprobe could not determine the audio duration."""

    pass


class SplitError(PodscribeError):
    """FFmpeg failed to cut a chunk out of the source audio."""

    pass


class TranscriptionError(PodscribeError):
    """A chunk's speech-recognition request failed."""

    pass


class FormattingError(PodscribeError):
    """The readability formatting pass failed for a chunk."""

    pass


class LLMError(PodscribeError):
    """Text-generation backend error."""

    pass


class LLMResponseError(LLMError):
    """LLM returned malformed or empty response."""

    pass


class DownloadError(PodscribeError):
    """Remote audio could not be fetched."""

    pass


class DependencyError(PodscribeError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
