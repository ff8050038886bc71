"""
Run configuration.

Loads settings from environment variables (and `.env`) with the same
defaults the command line uses.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Localization settings loaded from environment."""
    
    # ==========================================================================
    # AWS
    # ==========================================================================
    
    aws_profile: str = "default"
    aws_region: str = "us-east-1"
    
    # ==========================================================================
    # Documents
    # ==========================================================================
    
    input_file: str = "assets/original/en.json"
    source_language_code: str = "en"
    output_dir: str = "assets/translated"
    
    # ==========================================================================
    # Retry / concurrency
    # ==========================================================================
    
    max_retries: int = Field(default=5, ge=0)
    retry_base_delay: float = 1.0  # seconds, doubled after every failure
    max_concurrency: int | None = Field(default=None, ge=1)  # None = one task per language
    
    # ==========================================================================
    # Translation backend
    # ==========================================================================
    
    # "aws" (Amazon Translate) or "llm" (DSPy)
    translation_provider: str = "aws"
    llm_provider: str = "gemini"
    llm_model: str | None = None
    
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """
    Configure process-wide logging.
    
    Falls back to the LOG_LEVEL environment variable, then INFO.
    """
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    
    # botocore is chatty at DEBUG
    if level != "DEBUG":
        logging.getLogger("botocore").setLevel(logging.WARNING)
