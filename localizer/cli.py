"""
Command line entry point.

    python -m localizer --source-language-code en --input-file assets/original/en.json

Flags override environment settings. Exits 0 only when every target
language was translated and written.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

from localizer.config import Settings, configure_logging, get_settings
from localizer.exceptions import LocalizerError
from localizer.orchestrator import FanOutOrchestrator, Summary
from localizer.services import create_translation_service
from localizer.sink import FileResultSink

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="localizer",
        description="Translate a JSON asset file into every supported language",
    )
    parser.add_argument("--aws-profile", help="AWS profile to use")
    parser.add_argument("--aws-region", help="AWS region to use")
    parser.add_argument("--input-file", help="Input file to translate")
    parser.add_argument("--source-language-code", help="Source language code")
    parser.add_argument("--output-dir", help="Directory for translated files")
    parser.add_argument("--max-retries", type=_non_negative_int, help="Retries per language after the first attempt")
    parser.add_argument(
        "--max-concurrency",
        type=_positive_int,
        help="Maximum languages translated at once (default: all)",
    )
    parser.add_argument(
        "--provider",
        dest="translation_provider",
        choices=["aws", "llm"],
        help="Translation backend",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command line overrides on top of environment settings."""
    base = base or get_settings()
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return base.model_copy(update=overrides)


async def run(settings: Settings) -> Summary:
    service = create_translation_service(settings)
    sink = FileResultSink(settings.output_dir)
    orchestrator = FanOutOrchestrator.from_settings(settings, service, sink)
    return await orchestrator.run()


def main(argv: Sequence[str] | None = None) -> int:
    """Run a localization from the command line; returns the exit code."""
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level)
    
    try:
        asyncio.run(run(settings))
    except LocalizerError as e:
        logger.error(f"Localization failed: {e}")
        return 1
    
    return 0
