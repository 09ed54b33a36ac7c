"""
podscribe.transcribe.language - Language code routing.

"auto" leaves the recognition model unconstrained. Explicit codes are reduced
to their primary subtag, with Chinese variants collapsed to "zh" and given a
short disambiguation prompt.
"""

from __future__ import annotations

AUTO = "auto"

CHINESE_CODES = {"zh", "chinese", "zh-cn", "zh-tw", "zh-hk", "zh-hans", "zh-hant", "cmn"}

LANGUAGE_PROMPTS = {
    "zh": "以下是普通话的句子。",
}

LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Chinese",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "ja": "Japanese",
    "ko": "Korean",
    "pt": "Portuguese",
    "it": "Italian",
    "ru": "Russian",
}


def normalize_language(code: str | None) -> str | None:
    """Map a language setting to the code sent to the recognition model.

    Region and script subtags are dropped (en-US -> en); the recognition
    model accepts primary codes only.

    Returns:
        None for automatic detection, otherwise a lower-case code
    """
    if code is None:
        return None
    code = code.strip().lower().replace("_", "-")
    if not code or code == AUTO:
        return None
    if code in CHINESE_CODES:
        return "zh"
    primary = code.split("-", 1)[0]
    if primary in CHINESE_CODES:
        return "zh"
    return primary


def is_chinese(code: str | None) -> bool:
    return normalize_language(code) == "zh"


def language_prompt(code: str | None) -> str | None:
    """Disambiguation hint for the recognition model, if any."""
    normalized = normalize_language(code)
    if normalized is None:
        return None
    return LANGUAGE_PROMPTS.get(normalized)


def language_name(code: str | None) -> str | None:
    """English name of a language, used in prompts."""
    normalized = normalize_language(code)
    if normalized is None:
        return None
    return LANGUAGE_NAMES.get(normalized)
