"""
Destinations for translated documents.

One destination per target language; jobs never share one, so no
locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from localizer.exceptions import WriteFailure

logger = logging.getLogger(__name__)


class ResultSink(ABC):
    """Where finished translations go."""
    
    @abstractmethod
    async def store(self, target_language: str, document: str) -> None:
        """
        Persist one translated document.
        
        Raises:
            WriteFailure: The destination could not be written
        """
        pass


class FileResultSink(ResultSink):
    """
    Write each translation to `<output_dir>/<language>.json`.
    
    Existing files are overwritten. Writes are neither atomic nor fsynced.
    """
    
    def __init__(self, output_dir: str = "assets/translated"):
        self.output_dir = Path(output_dir)
    
    def path_for(self, target_language: str) -> Path:
        return self.output_dir / f"{target_language}.json"
    
    def _write(self, target_language: str, document: str) -> Path:
        path = self.path_for(target_language)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
        return path
    
    async def store(self, target_language: str, document: str) -> None:
        loop = asyncio.get_running_loop()
        try:
            path = await loop.run_in_executor(None, self._write, target_language, document)
        except (OSError, UnicodeError) as e:
            raise WriteFailure(target_language, f"cannot write {self.path_for(target_language)}: {e}") from e
        logger.debug(f"Wrote {path}")
