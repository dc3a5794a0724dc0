"""
JSON File Storage Implementation

DESIGN DECISION: A local JSON document is the default backend because:
1. No database setup required
2. The user can back up or inspect their data with any editor
3. Export and storage share one format

One document per storage key, inside the configured data directory.
Writes go to a temporary file that then replaces the document, so a
crash mid-write never leaves a half-written portfolio behind.

Transient OS errors are retried with tenacity; when retries run out the
failure surfaces as PersistenceError. Retry policy for whole operations
stays with the caller.
"""

import os
from pathlib import Path
from typing import Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from networth.config import TrackerSettings, get_settings
from networth.models.portfolio import PortfolioState
from networth.services.storage.codec import dump_state, parse_state
from networth.services.storage.interface import (
    MalformedImportError,
    NoDataError,
    PersistenceError,
    PortfolioRepository,
)


class JsonFilePortfolioRepository(PortfolioRepository):
    """Portfolio storage as a JSON file on local disk."""
    
    def __init__(
        self,
        path: Optional[Path] = None,
        retry_attempts: Optional[int] = None,
        retry_max_wait: Optional[float] = None,
        settings: Optional[TrackerSettings] = None,
    ):
        settings = settings or get_settings()
        self._path = Path(path) if path is not None else settings.storage_file
        self._retry_attempts = retry_attempts or settings.storage_retry_attempts
        self._retry_max_wait = (
            retry_max_wait if retry_max_wait is not None
            else settings.storage_retry_max_wait
        )
    
    @property
    def path(self) -> Path:
        return self._path
    
    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=self._retry_max_wait),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
    
    def _read_text(self) -> Optional[str]:
        for attempt in self._retrying():
            with attempt:
                try:
                    return self._path.read_text(encoding="utf-8")
                except FileNotFoundError:
                    return None
        return None
    
    def _write_text(self, text: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            for attempt in self._retrying():
                with attempt:
                    self._path.parent.mkdir(parents=True, exist_ok=True)
                    tmp_path.write_text(text, encoding="utf-8")
                    os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
    
    async def save(self, state: PortfolioState) -> bool:
        try:
            self._write_text(dump_state(state))
        except OSError as e:
            raise PersistenceError(f"Failed to save portfolio to {self._path}: {e}") from e
        return True
    
    async def load(self) -> Optional[PortfolioState]:
        try:
            text = self._read_text()
        except OSError as e:
            raise PersistenceError(f"Failed to load portfolio from {self._path}: {e}") from e
        except UnicodeDecodeError as e:
            raise PersistenceError(f"Stored portfolio is corrupt: {e}") from e
        
        if text is None:
            return None
        try:
            return parse_state(text)
        except MalformedImportError as e:
            raise PersistenceError(f"Stored portfolio is corrupt: {e}") from e
    
    async def exists(self) -> bool:
        return self._path.is_file()
    
    async def clear(self) -> bool:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to clear {self._path}: {e}") from e
        return True
    
    async def export(self) -> str:
        state = await self.load()
        if state is None:
            raise NoDataError("No data to export")
        return dump_state(state, indent=2)
    
    async def import_data(self, text: str) -> PortfolioState:
        state = parse_state(text)
        await self.save(state)
        return state
