"""Shared test doubles for the localization pipeline."""

from __future__ import annotations

import json

import pytest

from localizer.exceptions import ServiceError
from localizer.services.base import TranslationService
from localizer.sink import ResultSink


class StubTranslationService(TranslationService):
    """
    In-memory translation service.
    
    - translations: text -> translated text (unknown text is returned unchanged)
    - failures: target language -> number of calls that fail before
      succeeding (-1 = always fail)
    """
    
    service_id = "stub"
    
    def __init__(
        self,
        languages: list[str] | None = None,
        translations: dict[str, str] | None = None,
        failures: dict[str, int] | None = None,
        list_error: Exception | None = None,
    ):
        self.languages = languages if languages is not None else ["auto", "en", "fr", "de"]
        self.translations = translations or {}
        self.failures = dict(failures or {})
        self.list_error = list_error
        self.calls: list[tuple[str, str, str]] = []
        self.list_calls = 0
    
    async def list_languages(self) -> list[str]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.languages)
    
    async def translate_text(self, source_language: str, target_language: str, text: str) -> str:
        self.calls.append((source_language, target_language, text))
        
        remaining = self.failures.get(target_language, 0)
        if remaining != 0:
            if remaining > 0:
                self.failures[target_language] = remaining - 1
            raise ServiceError(f"{target_language} unavailable")
        
        return self.translations.get(text, text)
    
    def calls_for(self, target_language: str) -> list[tuple[str, str, str]]:
        return [call for call in self.calls if call[1] == target_language]


class MemorySink(ResultSink):
    """Collects stored documents in a dict."""
    
    def __init__(self):
        self.documents: dict[str, str] = {}
    
    async def store(self, target_language: str, document: str) -> None:
        self.documents[target_language] = document
    
    def parsed(self, target_language: str):
        return json.loads(self.documents[target_language])


class RecordingSleep:
    """Sleep replacement that records requested delays without waiting."""
    
    def __init__(self):
        self.delays: list[float] = []
    
    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def service():
    return StubTranslationService(translations={"hello": "bonjour"})


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "en.json"
    path.write_text(json.dumps({"a": "hello", "b": {"c": ""}}), encoding="utf-8")
    return path
