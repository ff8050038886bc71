"""
Whole-document translation with retry.

One call parses the source text once, then runs the tree translator
against a fresh copy of the parsed document on every attempt, backing
off exponentially between failed attempts.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from typing import Any, Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from localizer.exceptions import ParseFailure, RetryExhausted, TranslationFailure
from localizer.tree import TreeTranslator

logger = logging.getLogger(__name__)


DEFAULT_MAX_RETRIES = 5
DEFAULT_BASE_DELAY = 1.0


def _log_retry(retry_state: RetryCallState) -> None:
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Attempt {retry_state.attempt_number} failed ({error}); retrying in {delay:g}s"
    )


class RetryingDocumentTranslator:
    """
    Translate a serialized JSON document, retrying failed attempts.
    
    Usage:
        translator = RetryingDocumentTranslator(TreeTranslator(service))
        text_fr = await translator.translate_document("en", "fr", raw_json)
    
    Args:
        tree_translator: Translator applied to each attempt's copy
        max_retries: Retries after the first attempt (5 → 6 attempts)
        base_delay: First backoff delay in seconds, doubled after every failure
        sleep: Awaitable sleep used between attempts
    """
    
    def __init__(
        self,
        tree_translator: TreeTranslator,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.tree_translator = tree_translator
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep
    
    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1
    
    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay, exp_base=2),
            retry=retry_if_exception_type(TranslationFailure),
            before_sleep=_log_retry,
            sleep=self._sleep,
        )
    
    async def translate_document(
        self,
        source_language: str,
        target_language: str,
        raw_document: str,
    ) -> str:
        """
        Translate a serialized document.
        
        Returns:
            The translated document, pretty-printed
        
        Raises:
            ParseFailure: raw_document is not valid JSON (not retried)
            RetryExhausted: Every attempt failed
        """
        try:
            document = json.loads(raw_document)
        except json.JSONDecodeError as e:
            raise ParseFailure(target_language, f"invalid JSON: {e}") from e
        
        try:
            async for attempt in self._retrying():
                with attempt:
                    translated = await self.tree_translator.translate(
                        source_language,
                        target_language,
                        copy.deepcopy(document),
                    )
        except RetryError as e:
            raise RetryExhausted(target_language, e.last_attempt.attempt_number) from e.last_attempt.exception()
        
        return json.dumps(translated, indent=2, ensure_ascii=False)
