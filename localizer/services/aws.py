# =============================================================================
# Amazon Translate Integration
# =============================================================================
#
# Setup:
#   1. Configure a profile in ~/.aws/credentials (or use "default")
#   2. Grant it translate:ListLanguages and translate:TranslateText
#   3. Pass --aws-profile / --aws-region, or set AWS_PROFILE / AWS_REGION
#
# boto3 is synchronous; calls run in the default executor so that the
# per-language jobs keep running concurrently.
#
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from localizer.exceptions import ServiceError
from localizer.services.base import TranslationService

logger = logging.getLogger(__name__)


class AWSTranslateService(TranslationService):
    """Translate text with Amazon Translate."""
    
    service_id = "aws"
    
    def __init__(self, profile: str = "default", region: str = "us-east-1", client: Any = None):
        self.profile = profile
        self.region = region
        self._client = client
    
    @property
    def client(self):
        """Lazy-load the Translate client."""
        if self._client is None:
            session = boto3.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("translate")
            logger.debug(f"Created Translate client for profile={self.profile} region={self.region}")
        return self._client
    
    async def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        loop = asyncio.get_running_loop()
        try:
            method = getattr(self.client, operation)
            return await loop.run_in_executor(None, partial(method, **params))
        except (BotoCoreError, ClientError) as e:
            raise ServiceError(f"Amazon Translate {operation} failed: {e}") from e
    
    async def list_languages(self) -> list[str]:
        codes: list[str] = []
        params: dict[str, Any] = {}
        
        while True:
            response = await self._call("list_languages", **params)
            codes.extend(lang["LanguageCode"] for lang in response.get("Languages", []))
            
            next_token = response.get("NextToken")
            if not next_token:
                break
            params = {"NextToken": next_token}
        
        logger.debug(f"Amazon Translate reports {len(codes)} languages")
        return codes
    
    async def translate_text(self, source_language: str, target_language: str, text: str) -> str:
        response = await self._call(
            "translate_text",
            Text=text,
            SourceLanguageCode=source_language,
            TargetLanguageCode=target_language,
        )
        return response["TranslatedText"]
