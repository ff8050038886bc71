"""
Fan-out of one document across every target language.

Flow:
1. Ask the service which languages it supports (fatal if this fails)
2. Read the input document once
3. Start one job per target language; each job translates with retry
   and hands the result to the sink
4. Wait for every job, then report success or the first failure
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field

from localizer.config import Settings
from localizer.document import DEFAULT_BASE_DELAY, DEFAULT_MAX_RETRIES, RetryingDocumentTranslator
from localizer.exceptions import DocumentReadFailure, ServiceHandshakeFailure
from localizer.languages import get_language_name, select_target_languages
from localizer.services.base import TranslationService
from localizer.sink import ResultSink
from localizer.tree import TreeTranslator

logger = logging.getLogger(__name__)


# =============================================================================
# Jobs & results
# =============================================================================


@dataclass(frozen=True)
class TranslationJob:
    """One unit of fan-out work."""
    
    source_language: str
    target_language: str
    document: str  # serialized source document, shared read-only


@dataclass(frozen=True)
class TranslationOutcome:
    """Result of one job: a translated document or the error that ended it."""
    
    target_language: str
    document: str | None = None
    error: BaseException | None = None
    
    @property
    def succeeded(self) -> bool:
        return self.error is None


class Summary(BaseModel):
    """Totals for a successful run."""
    
    source_language: str
    target_languages: list[str] = Field(default_factory=list)
    completed: int = 0
    elapsed_seconds: float = 0.0


# =============================================================================
# Orchestrator
# =============================================================================


class FanOutOrchestrator:
    """
    Translate one input document into every supported language.
    
    Usage:
        orchestrator = FanOutOrchestrator(
            service=AWSTranslateService(),
            sink=FileResultSink("assets/translated"),
            input_file="assets/original/en.json",
            source_language="en",
        )
        summary = await orchestrator.run()
    
    Jobs are never cancelled: when one fails the others still run to
    completion and their outputs stay written.
    """
    
    def __init__(
        self,
        service: TranslationService,
        sink: ResultSink,
        input_file: str,
        source_language: str = "en",
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_concurrency: int | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.service = service
        self.sink = sink
        self.input_file = input_file
        self.source_language = source_language
        self.max_concurrency = max_concurrency
        self.document_translator = RetryingDocumentTranslator(
            TreeTranslator(service),
            max_retries=max_retries,
            base_delay=base_delay,
            sleep=sleep,
        )
    
    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        service: TranslationService,
        sink: ResultSink,
    ) -> FanOutOrchestrator:
        return cls(
            service=service,
            sink=sink,
            input_file=settings.input_file,
            source_language=settings.source_language_code,
            max_retries=settings.max_retries,
            base_delay=settings.retry_base_delay,
            max_concurrency=settings.max_concurrency,
        )
    
    async def _list_languages(self) -> list[str]:
        try:
            return await self.service.list_languages()
        except Exception as e:
            raise ServiceHandshakeFailure(f"Could not list supported languages: {e}") from e
    
    async def _read_input(self) -> str:
        loop = asyncio.get_running_loop()
        path = Path(self.input_file)
        try:
            return await loop.run_in_executor(None, partial(path.read_text, encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadFailure(self.input_file, str(e)) from e
    
    async def _run_job(self, job: TranslationJob, limit) -> TranslationOutcome:
        async with limit:
            target = job.target_language
            logger.info(f"Translating into {get_language_name(target)} ({target})")
            
            document = await self.document_translator.translate_document(
                job.source_language,
                target,
                job.document,
            )
            await self.sink.store(target, document)
        
        logger.debug(f"Finished {target}")
        return TranslationOutcome(target_language=target, document=document)
    
    async def run_jobs(self, jobs: list[TranslationJob]) -> list[TranslationOutcome]:
        """
        Run every job concurrently and wait for all of them.
        
        Returns one outcome per job, in job order. Failures are captured in
        the outcome rather than raised.
        """
        if self.max_concurrency is None:
            limit = contextlib.nullcontext()
        else:
            limit = asyncio.Semaphore(self.max_concurrency)
        
        results = await asyncio.gather(
            *(self._run_job(job, limit) for job in jobs),
            return_exceptions=True,
        )
        
        outcomes = []
        for job, result in zip(jobs, results):
            if isinstance(result, BaseException):
                outcomes.append(TranslationOutcome(target_language=job.target_language, error=result))
            else:
                outcomes.append(result)
        return outcomes
    
    async def run(self) -> Summary:
        """
        Translate the input document into every target language.
        
        Returns:
            Summary with the languages processed and elapsed time
        
        Raises:
            ServiceHandshakeFailure: The language list could not be fetched
            DocumentReadFailure: The input file could not be read
            LocalizerError: The first job that failed (after all jobs finished)
        """
        start = time.monotonic()
        logger.info("Starting translation")
        
        language_codes = await self._list_languages()
        targets = select_target_languages(language_codes, self.source_language)
        document = await self._read_input()
        
        jobs = [
            TranslationJob(
                source_language=self.source_language,
                target_language=target,
                document=document,
            )
            for target in targets
        ]
        outcomes = await self.run_jobs(jobs)
        
        failures = [outcome for outcome in outcomes if not outcome.succeeded]
        for failure in failures:
            logger.error(f"Translation into {failure.target_language} failed: {failure.error}")
        if failures:
            logger.error(f"{len(failures)} of {len(jobs)} translations failed")
            raise failures[0].error
        
        elapsed = time.monotonic() - start
        logger.info(f"Time elapsed: {elapsed:.2f}s")
        logger.info(f"Completed {len(jobs)} translations")
        
        return Summary(
            source_language=self.source_language,
            target_languages=targets,
            completed=len(jobs),
            elapsed_seconds=elapsed,
        )
