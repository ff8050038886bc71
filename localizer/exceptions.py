"""
Error taxonomy for a localization run.

Leaf failures are retried at the document level; everything else is
terminal for the job (or the whole run) that raised it.
"""

from __future__ import annotations


class LocalizerError(Exception):
    """Base exception for localization errors."""
    pass


class ServiceError(LocalizerError):
    """A call to the translation service failed."""
    pass


class ServiceHandshakeFailure(LocalizerError):
    """Listing supported languages failed. Fatal to the whole run."""
    pass


class DocumentReadFailure(LocalizerError):
    """The input document could not be read."""
    
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read input document '{path}': {reason}")


class JobError(LocalizerError):
    """An error tied to one target language."""
    
    def __init__(self, target_language: str, message: str):
        self.target_language = target_language
        super().__init__(f"[{target_language}] {message}")


class ParseFailure(JobError):
    """The input document is not valid JSON. Never retried."""
    pass


class TranslationFailure(JobError):
    """A single leaf translation failed; the whole document attempt is discarded."""
    pass


class RetryExhausted(JobError):
    """Every attempt allowed by the retry budget failed."""
    
    def __init__(self, target_language: str, attempts: int):
        self.attempts = attempts
        super().__init__(
            target_language,
            f"translation failed after {attempts} attempts",
        )


class WriteFailure(JobError):
    """The translated document could not be written."""
    pass
