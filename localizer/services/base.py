"""
Base class for translation services.

A translation service is the remote capability the pipeline fans out
over. It is shared by every job, so implementations must be safe to call
concurrently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TranslationService(ABC):
    """
    Machine-translation backend.
    
    Example:
        class UpperCaseService(TranslationService):
            service_id = "upper"
            
            async def list_languages(self) -> list[str]:
                return ["auto", "en", "xx"]
            
            async def translate_text(self, source, target, text):
                return text.upper()
    """
    
    service_id: str = "base"
    
    @abstractmethod
    async def list_languages(self) -> list[str]:
        """
        List every language code the service supports.
        
        Raises:
            ServiceError: The service could not be reached
        """
        pass
    
    @abstractmethod
    async def translate_text(self, source_language: str, target_language: str, text: str) -> str:
        """
        Translate one piece of text.
        
        Raises:
            ServiceError: The call failed
        """
        pass
