"""
In-Memory Storage Implementation

A dict-backed key-value store holding the serialized portfolio text.
Used in tests and for throwaway sessions. Going through the same
serialization as the file store means tests exercise the real format.
"""

from typing import Optional

from networth.models.portfolio import PortfolioState
from networth.services.storage.codec import dump_state, parse_state
from networth.services.storage.interface import (
    MalformedImportError,
    NoDataError,
    PersistenceError,
    PortfolioRepository,
)


class InMemoryPortfolioRepository(PortfolioRepository):
    """Portfolio storage in a plain dict, keyed by storage key."""
    
    def __init__(
        self,
        storage_key: str = "networth_portfolio",
        store: Optional[dict[str, str]] = None,
    ):
        self._key = storage_key
        self._store = store if store is not None else {}
    
    async def save(self, state: PortfolioState) -> bool:
        self._store[self._key] = dump_state(state)
        return True
    
    async def load(self) -> Optional[PortfolioState]:
        text = self._store.get(self._key)
        if text is None:
            return None
        try:
            return parse_state(text)
        except MalformedImportError as e:
            raise PersistenceError(f"Stored portfolio is corrupt: {e}") from e
    
    async def exists(self) -> bool:
        return self._key in self._store
    
    async def clear(self) -> bool:
        self._store.pop(self._key, None)
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
