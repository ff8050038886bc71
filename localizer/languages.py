"""
Language codes and target selection.

Amazon Translate reports its own language list at runtime. The LLM
backend has no such endpoint and offers the codes in `LANGUAGE_NAMES`,
which use the same spelling as Amazon Translate (e.g. "zh-TW").
"""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


# Sentinel meaning "detect the source language". Never a translation target.
AUTO_LANGUAGE = "auto"


LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "pl": "Polish",
    "sv": "Swedish",
    "uk": "Ukrainian",
    "ru": "Russian",
    "tr": "Turkish",
    "ar": "Arabic",
    "hi": "Hindi",
    "id": "Indonesian",
    "vi": "Vietnamese",
    "th": "Thai",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese (Simplified)",
    "zh-TW": "Chinese (Traditional)",
}

_NAMES_BY_LOWER = {code.lower(): name for code, name in LANGUAGE_NAMES.items()}


# Codes offered by backends without a language listing endpoint
SUPPORTED_LANGUAGES = list(LANGUAGE_NAMES)


def get_language_name(code: str) -> str:
    """Get human-readable language name."""
    return _NAMES_BY_LOWER.get(code.lower(), code)


def select_target_languages(
    language_codes: Iterable[str],
    source_language: str,
) -> list[str]:
    """
    Pick the languages a document should be translated into.
    
    Drops the auto-detect sentinel, the source language and duplicates,
    keeping the order the service reported.
    
    Args:
        language_codes: Every code the translation service supports
        source_language: Language the input document is written in
    
    Returns:
        Target language codes
    """
    targets: list[str] = []
    seen: set[str] = set()
    
    for code in language_codes:
        if code == AUTO_LANGUAGE:
            logger.debug("Skipping auto language")
            continue
        if code == source_language:
            logger.debug("Skipping source language")
            continue
        if code in seen:
            continue
        seen.add(code)
        targets.append(code)
    
    return targets
