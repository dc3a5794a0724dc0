"""
Storage Services Package

Provides the abstract persistence interface and concrete implementations.
The JSON file store is the default backend; the in-memory store backs
tests and throwaway sessions.
"""

from networth.services.storage.interface import (
    MalformedImportError,
    NoDataError,
    PersistenceError,
    PortfolioRepository,
    StorageError,
)
from networth.services.storage.codec import dump_state, parse_state
from networth.services.storage.json_file import JsonFilePortfolioRepository
from networth.services.storage.memory import InMemoryPortfolioRepository

__all__ = [
    # Interface
    "PortfolioRepository",
    # Exceptions
    "MalformedImportError",
    "NoDataError",
    "PersistenceError",
    "StorageError",
    # Encoding
    "dump_state",
    "parse_state",
    # Implementations
    "InMemoryPortfolioRepository",
    "JsonFilePortfolioRepository",
]
