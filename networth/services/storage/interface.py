"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for persisting the portfolio.
This allows us to:
1. Keep the JSON file store for everyday use
2. Use in-memory storage for testing
3. Swap in another key-value backend later
4. Keep the portfolio logic decoupled from storage

The whole portfolio is stored as one document; every save is a full
overwrite. Storage is the only asynchronous boundary in the tracker.
"""

from abc import ABC, abstractmethod
from typing import Optional

from networth.models.portfolio import PortfolioState


class PortfolioRepository(ABC):
    """
    Abstract interface for portfolio persistence.
    
    Any storage implementation must implement these methods.
    """
    
    @abstractmethod
    async def save(self, state: PortfolioState) -> bool:
        """
        Persist the portfolio, replacing whatever was stored before.
        
        Returns:
            True if saved successfully
            
        Raises:
            PersistenceError: If the write fails
        """
        pass
    
    @abstractmethod
    async def load(self) -> Optional[PortfolioState]:
        """
        Load the most recently saved portfolio.
        
        Returns:
            The stored state, or None when nothing has been saved yet
            
        Raises:
            PersistenceError: If the read fails or the stored data is corrupt
        """
        pass
    
    @abstractmethod
    async def exists(self) -> bool:
        """Check whether a portfolio has been saved."""
        pass
    
    @abstractmethod
    async def clear(self) -> bool:
        """
        Remove the stored portfolio.
        
        Returns:
            True if cleared (also when nothing was stored)
            
        Raises:
            PersistenceError: If removal fails
        """
        pass
    
    @abstractmethod
    async def export(self) -> str:
        """
        Serialize the stored portfolio as pretty-printed JSON.
        
        Raises:
            NoDataError: If nothing has been saved yet
            PersistenceError: If the read fails
        """
        pass
    
    @abstractmethod
    async def import_data(self, text: str) -> PortfolioState:
        """
        Parse exported JSON, persist it and return it.
        
        All-or-nothing: nothing is written unless the whole document parses.
        
        Raises:
            MalformedImportError: If the text is not a valid portfolio
            PersistenceError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceError(StorageError):
    """The underlying store could not be read or written."""
    pass


class NoDataError(StorageError):
    """Nothing has been persisted yet."""
    pass


class MalformedImportError(StorageError):
    """Import text is not valid JSON or does not describe a portfolio."""
    pass
