"""
Structure-preserving translation of a JSON document.

Walks a parsed JSON value and rebuilds it with every non-empty string
leaf replaced by its translation. Containers are always rebuilt, so the
input value is never modified.
"""

from __future__ import annotations

import logging
from typing import Any

from localizer.exceptions import TranslationFailure
from localizer.services.base import TranslationService

logger = logging.getLogger(__name__)


class TreeTranslator:
    """
    Translates the string leaves of a JSON value.
    
    - Objects: every value is translated, keys and key order are kept
    - Arrays: every element is translated, positions are kept
    - Strings: sent to the service, except "" which stays ""
    - Numbers, booleans, null: returned as-is
    
    The first failing leaf aborts the whole walk with TranslationFailure;
    nothing translated so far is returned.
    """
    
    def __init__(self, service: TranslationService):
        self.service = service
    
    async def translate(self, source_language: str, target_language: str, value: Any) -> Any:
        if isinstance(value, dict):
            translated = {}
            for key, child in value.items():
                translated[key] = await self.translate(source_language, target_language, child)
            return translated
        
        if isinstance(value, list):
            return [
                await self.translate(source_language, target_language, item)
                for item in value
            ]
        
        if isinstance(value, str):
            return await self._translate_leaf(source_language, target_language, value)
        
        return value
    
    async def _translate_leaf(self, source_language: str, target_language: str, text: str) -> str:
        # The service rejects empty input
        if text == "":
            return ""
        
        try:
            return await self.service.translate_text(source_language, target_language, text)
        except Exception as e:
            logger.debug(f"Leaf translation to {target_language} failed: {e}")
            raise TranslationFailure(target_language, str(e)) from e
