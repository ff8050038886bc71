"""
Localizer - translate a JSON asset document into every language a
machine-translation service supports.

Usage:
    from localizer import FanOutOrchestrator, FileResultSink, AWSTranslateService
    
    orchestrator = FanOutOrchestrator(
        service=AWSTranslateService(profile="default", region="us-east-1"),
        sink=FileResultSink("assets/translated"),
        input_file="assets/original/en.json",
        source_language="en",
    )
    summary = await orchestrator.run()
"""

from localizer.config import Settings, get_settings, configure_logging
from localizer.exceptions import (
    LocalizerError,
    ServiceError,
    ServiceHandshakeFailure,
    DocumentReadFailure,
    ParseFailure,
    TranslationFailure,
    RetryExhausted,
    WriteFailure,
)
from localizer.languages import AUTO_LANGUAGE, select_target_languages
from localizer.services import (
    TranslationService,
    AWSTranslateService,
    LLMTranslateService,
    create_translation_service,
)
from localizer.tree import TreeTranslator
from localizer.document import RetryingDocumentTranslator
from localizer.sink import ResultSink, FileResultSink
from localizer.orchestrator import (
    FanOutOrchestrator,
    Summary,
    TranslationJob,
    TranslationOutcome,
)

__all__ = [
    # Pipeline
    "TreeTranslator",
    "RetryingDocumentTranslator",
    "FanOutOrchestrator",
    "Summary",
    "TranslationJob",
    "TranslationOutcome",
    # Sinks
    "ResultSink",
    "FileResultSink",
    # Services
    "TranslationService",
    "AWSTranslateService",
    "LLMTranslateService",
    "create_translation_service",
    # Languages
    "AUTO_LANGUAGE",
    "select_target_languages",
    # Config
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "LocalizerError",
    "ServiceError",
    "ServiceHandshakeFailure",
    "DocumentReadFailure",
    "ParseFailure",
    "TranslationFailure",
    "RetryExhausted",
    "WriteFailure",
]
