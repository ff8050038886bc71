"""
Tests for translation service backends.

The boto3 client and DSPy module are replaced with in-process fakes.
"""

from types import SimpleNamespace

import dspy
import pytest
from botocore.exceptions import ClientError

from conftest import MemorySink, RecordingSleep
from localizer.config import Settings
from localizer.exceptions import ServiceError, ServiceHandshakeFailure
from localizer.orchestrator import FanOutOrchestrator
from localizer.services import (
    AWSTranslateService,
    LLMTranslateService,
    create_translation_service,
)
from localizer.services.llm import get_lm


# =============================================================================
# Fakes
# =============================================================================


class FakeTranslateClient:
    """Mimics the boto3 `translate` client."""
    
    def __init__(self, pages=None, error=None):
        self.pages = pages or [{"Languages": [{"LanguageCode": "auto"}, {"LanguageCode": "en"}]}]
        self.error = error
        self.requests = []
    
    def list_languages(self, **kwargs):
        self.requests.append(("list_languages", kwargs))
        if self.error:
            raise self.error
        index = int(kwargs.get("NextToken", 0))
        return self.pages[index]
    
    def translate_text(self, **kwargs):
        self.requests.append(("translate_text", kwargs))
        if self.error:
            raise self.error
        return {"TranslatedText": f"{kwargs['TargetLanguageCode']}:{kwargs['Text']}"}


def throttled() -> ClientError:
    return ClientError(
        {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
        "TranslateText",
    )


# =============================================================================
# Amazon Translate
# =============================================================================


class TestAWSTranslateService:
    @pytest.mark.asyncio
    async def test_list_languages_follows_pages(self):
        client = FakeTranslateClient(pages=[
            {"Languages": [{"LanguageCode": "auto"}, {"LanguageCode": "en"}], "NextToken": "1"},
            {"Languages": [{"LanguageCode": "fr"}, {"LanguageCode": "de"}]},
        ])
        service = AWSTranslateService(client=client)
        
        assert await service.list_languages() == ["auto", "en", "fr", "de"]
        assert client.requests[1] == ("list_languages", {"NextToken": "1"})

    @pytest.mark.asyncio
    async def test_translate_text(self):
        client = FakeTranslateClient()
        service = AWSTranslateService(client=client)
        
        assert await service.translate_text("en", "fr", "hello") == "fr:hello"
        assert client.requests == [(
            "translate_text",
            {"Text": "hello", "SourceLanguageCode": "en", "TargetLanguageCode": "fr"},
        )]

    @pytest.mark.asyncio
    async def test_client_errors_become_service_errors(self):
        service = AWSTranslateService(client=FakeTranslateClient(error=throttled()))
        
        with pytest.raises(ServiceError, match="ThrottlingException"):
            await service.translate_text("en", "fr", "hello")
        
        with pytest.raises(ServiceError):
            await service.list_languages()


# =============================================================================
# LLM
# =============================================================================


class TestLLMTranslateService:
    def make_service(self, module) -> LLMTranslateService:
        return LLMTranslateService(
            provider="openai",
            module=module,
            lm=dspy.LM(model="openai/gpt-4o-mini", api_key="test-key"),
        )

    @pytest.mark.asyncio
    async def test_list_languages_includes_auto(self):
        languages = await self.make_service(module=None).list_languages()
        
        assert languages[0] == "auto"
        assert "fr" in languages

    @pytest.mark.asyncio
    async def test_translate_text_uses_language_names(self):
        seen = {}
        
        def module(**kwargs):
            seen.update(kwargs)
            return SimpleNamespace(translated_text="  bonjour \n")
        
        service = self.make_service(module)
        
        assert await service.translate_text("en", "fr", "hello") == "bonjour"
        assert seen == {"text": "hello", "source_language": "English", "target_language": "French"}

    @pytest.mark.asyncio
    async def test_errors_become_service_errors(self):
        def module(**kwargs):
            raise RuntimeError("model overloaded")
        
        service = self.make_service(module)
        
        with pytest.raises(ServiceError, match="model overloaded"):
            await service.translate_text("en", "fr", "hello")

    @pytest.mark.asyncio
    async def test_translation_keeps_source_padding(self):
        def module(**kwargs):
            return SimpleNamespace(translated_text="Suivant\n")
        
        service = self.make_service(module)
        
        assert await service.translate_text("en", "fr", " Next ") == " Suivant "
        assert await service.translate_text("en", "fr", "\tNext") == "\tSuivant"

    @pytest.mark.asyncio
    async def test_whitespace_only_text_skips_model(self):
        def module(**kwargs):
            raise AssertionError("model should not be called")
        
        service = self.make_service(module)
        
        assert await service.translate_text("en", "fr", "  ") == "  "

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_language_listing(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        service = LLMTranslateService(provider="anthropic")
        
        with pytest.raises(ServiceError, match="ANTHROPIC_API_KEY"):
            await service.list_languages()

    @pytest.mark.asyncio
    async def test_unknown_provider_fails_handshake(self, tmp_path):
        input_file = tmp_path / "en.json"
        input_file.write_text('{"a": "hello"}', encoding="utf-8")
        sink = MemorySink()
        orchestrator = FanOutOrchestrator(
            service=LLMTranslateService(provider="nope"),
            sink=sink,
            input_file=str(input_file),
            source_language="en",
            sleep=RecordingSleep(),
        )
        
        with pytest.raises(ServiceHandshakeFailure):
            await orchestrator.run()
        
        assert sink.documents == {}

    def test_get_lm_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_lm("nope")

    def test_get_lm_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            get_lm("anthropic")


# =============================================================================
# Factory
# =============================================================================


class TestCreateTranslationService:
    def test_aws_default(self):
        service = create_translation_service(Settings(aws_profile="dev", aws_region="eu-west-1"))
        
        assert isinstance(service, AWSTranslateService)
        assert service.profile == "dev"
        assert service.region == "eu-west-1"

    def test_llm(self):
        service = create_translation_service(
            Settings(translation_provider="llm", llm_provider="openai", llm_model="gpt-4o")
        )
        
        assert isinstance(service, LLMTranslateService)
        assert service.provider == "openai"
        assert service.model == "gpt-4o"

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            create_translation_service(Settings(translation_provider="carrier-pigeon"))
