"""
Translation service backends.

- AWSTranslateService → Amazon Translate (default)
- LLMTranslateService → any DSPy-supported LLM
"""

from __future__ import annotations

from localizer.config import Settings
from localizer.services.base import TranslationService
from localizer.services.aws import AWSTranslateService
from localizer.services.llm import LLMTranslateService


def create_translation_service(settings: Settings) -> TranslationService:
    """Build the backend named by `settings.translation_provider`."""
    provider = settings.translation_provider.lower()
    
    if provider == "aws":
        return AWSTranslateService(profile=settings.aws_profile, region=settings.aws_region)
    if provider == "llm":
        return LLMTranslateService(provider=settings.llm_provider, model=settings.llm_model)
    
    raise ValueError(f"Unknown translation provider: {settings.translation_provider}")


__all__ = [
    "TranslationService",
    "AWSTranslateService",
    "LLMTranslateService",
    "create_translation_service",
]
