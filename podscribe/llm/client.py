"""
podscribe.llm.client - Remote model client using litellm.

One client serves both the speech-recognition endpoint and the chat
endpoint used by the formatting and summary passes. Requests are never
retried; timeouts are whatever the client is configured with.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from podscribe.logging import logger


def _field(obj: Any, key: str, default: Any = None) -> Any:
    """Read a field from a dict or an attribute-style response object."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def parse_transcription_response(response: Any, timestamps: bool) -> dict[str, Any]:
    """Normalize a transcription response into text plus segments.

    Args:
        response: litellm TranscriptionResponse, dict, or plain string
        timestamps: Whether time-aligned segments were requested

    Returns:
        Dict with "text" and "segments" (list of start/end/text dicts)
    """
    from podscribe.exceptions import TranscriptionError

    if isinstance(response, str):
        text = response
        raw_segments = None
    else:
        text = _field(response, "text")
        raw_segments = _field(response, "segments")

    if text is None:
        raise TranscriptionError("Transcription response contained no text")

    segments = []
    if timestamps:
        if raw_segments is None:
            raise TranscriptionError("Transcription response contained no segments")
        for seg in raw_segments:
            segments.append(
                {
                    "start": float(_field(seg, "start", 0.0)),
                    "end": float(_field(seg, "end", 0.0)),
                    "text": str(_field(seg, "text", "")),
                }
            )

    return {"text": str(text).strip(), "segments": segments}


class LLMClient:
    """Client for the remote transcription and chat models."""

    def __init__(
        self,
        model: str = "gpt-3.5-turbo",
        transcription_model: str = "whisper-1",
        api_key: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.model = model
        self.transcription_model = transcription_model
        self.api_key = api_key
        self.api_base = api_base
        self.timeout = timeout

    def _connection_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs

    def transcribe(
        self,
        audio_path: Path,
        language: str | None = None,
        prompt: str | None = None,
        timestamps: bool = False,
    ) -> dict[str, Any]:
        """Send one audio file to the speech-recognition model.

        Args:
            audio_path: Audio file to upload
            language: ISO language code, or None to let the model detect it
            prompt: Optional disambiguation hint
            timestamps: Request time-aligned segments (verbose_json)

        Returns:
            Dict with "text" and "segments"

        Raises:
            TranscriptionError: If the request fails or the response is unusable
        """
        from podscribe.exceptions import TranscriptionError

        try:
            import litellm
        except ImportError as e:
            raise TranscriptionError(
                "litellm not installed. Install with: pip install litellm"
            ) from e

        litellm.telemetry = False

        kwargs = self._connection_kwargs()
        if language:
            kwargs["language"] = language
        if prompt:
            kwargs["prompt"] = prompt

        try:
            with open(audio_path, "rb") as f:
                response = litellm.transcription(
                    model=self.transcription_model,
                    file=f,
                    response_format="verbose_json" if timestamps else "text",
                    **kwargs,
                )
        except Exception as e:
            raise TranscriptionError(f"Transcription of {audio_path.name} failed: {e}") from e

        return parse_transcription_response(response, timestamps)

    def complete(
        self,
        prompt: str,
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Send a chat prompt and return the completion text.

        Args:
            prompt: User message
            system: Optional system message
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            Response text

        Raises:
            LLMError: If the request fails
            LLMResponseError: If the response has no content
        """
        from podscribe.exceptions import LLMError, LLMResponseError

        try:
            import litellm
        except ImportError as e:
            raise LLMError("litellm not installed. Install with: pip install litellm") from e

        litellm.telemetry = False

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        kwargs = self._connection_kwargs()
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = litellm.completion(model=self.model, messages=messages, **kwargs)
        except Exception as e:
            raise LLMError(f"LLM request failed: {e}") from e

        choices = _field(response, "choices") or []
        if not choices:
            raise LLMResponseError("Empty response from LLM")

        message = _field(choices[0], "message")
        if message is None:
            raise LLMResponseError("No message in LLM response")

        content = _field(message, "content")
        if not content:
            raise LLMResponseError("No content in LLM message")

        logger.debug("LLM returned %d chars", len(content))
        return content


def create_client_from_config(config: Any) -> LLMClient:
    """Create LLM client from PodscribeConfig."""
    return LLMClient(
        model=config.llm_model,
        transcription_model=config.transcription_model,
        api_key=config.api_key,
        api_base=config.base_url,
        timeout=config.request_timeout,
    )
