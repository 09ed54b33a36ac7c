"""
podscribe.download - Fetch remote audio over HTTP(S).
"""

from __future__ import annotations

import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass

from podscribe.exceptions import DownloadError
from podscribe.logging import logger

SUPPORTED_EXTENSIONS = ["mp3", "wav", "m4a", "ogg", "mp4", "webm", "flac"]
DEFAULT_EXTENSION = "mp3"


@dataclass
class DownloadResult:
    data: bytes
    extension: str


def is_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def get_file_extension(url_or_path: str) -> str:
    """Pick the audio extension from a URL or file name.

    Query strings and fragments are ignored. Unknown or missing extensions
    fall back to mp3.
    """
    if is_url(url_or_path):
        pathname = urllib.parse.urlparse(url_or_path).path
    else:
        pathname = url_or_path.split("?")[0].split("#")[0]

    name = pathname.rsplit("/", 1)[-1]
    if "." in name:
        ext = name.rsplit(".", 1)[-1].lower()
        if is_supported_extension(ext):
            return ext
    return DEFAULT_EXTENSION


def is_supported_extension(ext: str) -> bool:
    return ext.lower().lstrip(".") in SUPPORTED_EXTENSIONS


def download_audio(url: str, timeout: float | None = None) -> DownloadResult:
    """Download an audio file into memory.

    Args:
        url: http(s) URL of the audio file
        timeout: Socket timeout in seconds (None for the library default)

    Returns:
        DownloadResult with the raw bytes and the detected extension

    Raises:
        DownloadError: On HTTP errors or network failures
    """
    logger.info("Downloading audio from %s", url)

    req = urllib.request.Request(url, method="GET", headers={"User-Agent": "podscribe"})
    try:
        kwargs = {"timeout": timeout} if timeout is not None else {}
        with urllib.request.urlopen(req, **kwargs) as response:
            data = response.read()
    except urllib.error.HTTPError as e:
        raise DownloadError(f"Failed to download audio: {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise DownloadError(f"Failed to download audio: {e.reason}") from e
    except OSError as e:
        raise DownloadError(f"Failed to download audio: {e}") from e

    extension = get_file_extension(url)
    logger.info("Downloaded %d bytes (%s)", len(data), extension)
    return DownloadResult(data=data, extension=extension)
