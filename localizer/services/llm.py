"""
LLM-powered translation using DSPy.

Supports Gemini (default), OpenAI, and Anthropic. Unlike Amazon Translate
there is no language listing endpoint, so the service offers the
built-in language table plus the auto-detect sentinel. The LM is
resolved during `list_languages`, so a bad configuration fails the
language handshake rather than every translation.
"""

from __future__ import annotations

import asyncio
import logging
import os
from functools import lru_cache

import dspy

from localizer.exceptions import ServiceError
from localizer.languages import AUTO_LANGUAGE, SUPPORTED_LANGUAGES, get_language_name
from localizer.services.base import TranslationService

logger = logging.getLogger(__name__)


# =============================================================================
# LM configuration
# =============================================================================


_PROVIDERS = {
    # provider: (model env var, default model, api key env vars)
    "gemini": ("GEMINI_MODEL", "gemini-2.0-flash", ("GOOGLE_API_KEY", "GEMINI_API_KEY")),
    "openai": ("OPENAI_MODEL", "gpt-4-turbo", ("OPENAI_API_KEY",)),
    "anthropic": ("ANTHROPIC_MODEL", "claude-3-opus-20240229", ("ANTHROPIC_API_KEY",)),
}


@lru_cache
def get_lm(provider: str = "gemini", model: str | None = None) -> dspy.LM:
    """
    Get configured language model.
    
    Args:
        provider: 'gemini', 'openai', or 'anthropic'
        model: Model name. Defaults to provider-specific env var.
    
    Returns:
        Configured DSPy LM instance.
    """
    if provider not in _PROVIDERS:
        raise ValueError(f"Unknown provider: {provider}")
    
    model_env, default_model, key_envs = _PROVIDERS[provider]
    model = model or os.getenv(model_env, default_model)
    api_key = next((os.getenv(name) for name in key_envs if os.getenv(name)), None)
    if not api_key:
        raise ValueError(f"{' or '.join(key_envs)} not set")
    
    # litellm routes on the provider prefix
    return dspy.LM(model=f"{provider}/{model}", api_key=api_key)


# =============================================================================
# DSPy Signature
# =============================================================================


class TranslateText(dspy.Signature):
    """Translate a UI string while preserving meaning, tone, placeholders and markup."""
    
    text: str = dspy.InputField(desc="Text to translate")
    source_language: str = dspy.InputField(desc="Source language name")
    target_language: str = dspy.InputField(desc="Target language name")
    
    translated_text: str = dspy.OutputField(desc="Translated text only, no commentary")


def _keep_padding(source: str, translated: str) -> str:
    """Re-apply the leading and trailing whitespace of the source text."""
    core = source.strip()
    if not core:
        return source
    start = source.index(core)
    return source[:start] + translated + source[start + len(core):]


# =============================================================================
# Service
# =============================================================================


class LLMTranslateService(TranslationService):
    """Translate text with an LLM through DSPy."""
    
    service_id = "llm"
    
    def __init__(
        self,
        provider: str = "gemini",
        model: str | None = None,
        module=None,
        lm: dspy.LM | None = None,
    ):
        self.provider = provider
        self.model = model
        self._module = module
        self._lm = lm
    
    @property
    def module(self):
        if self._module is None:
            self._module = dspy.Predict(TranslateText)
        return self._module
    
    @property
    def lm(self) -> dspy.LM:
        if self._lm is None:
            self._lm = get_lm(self.provider, self.model)
        return self._lm
    
    async def list_languages(self) -> list[str]:
        # Resolve the LM up front so a bad provider or missing key fails the
        # handshake instead of every leaf
        try:
            lm = self.lm
        except ValueError as e:
            raise ServiceError(f"LLM backend is not configured: {e}") from e
        logger.debug(f"Using LM {getattr(lm, 'model', lm)}")
        return [AUTO_LANGUAGE, *SUPPORTED_LANGUAGES]
    
    def _predict(self, source_language: str, target_language: str, text: str) -> str:
        # dspy.context keeps the LM local to this thread instead of global
        with dspy.context(lm=self.lm):
            result = self.module(
                text=text,
                source_language=get_language_name(source_language),
                target_language=get_language_name(target_language),
            )
        return _keep_padding(text, result.translated_text.strip())
    
    async def translate_text(self, source_language: str, target_language: str, text: str) -> str:
        if not text.strip():
            return text
        
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None, self._predict, source_language, target_language, text
            )
        except Exception as e:
            raise ServiceError(f"LLM translation to {target_language} failed: {e}") from e
