"""Services package."""

from networth.services.calculator import PortfolioSummary, summarize
from networth.services.projection import (
    ProjectionPoint,
    break_even_point,
    project_net_worth,
    projected_liability_value,
)
from networth.services.storage import (
    InMemoryPortfolioRepository,
    JsonFilePortfolioRepository,
    MalformedImportError,
    NoDataError,
    PersistenceError,
    PortfolioRepository,
    StorageError,
)

__all__ = [
    # Calculations
    "PortfolioSummary",
    "summarize",
    # Projections
    "ProjectionPoint",
    "break_even_point",
    "project_net_worth",
    "projected_liability_value",
    # Storage services
    "InMemoryPortfolioRepository",
    "JsonFilePortfolioRepository",
    "MalformedImportError",
    "NoDataError",
    "PersistenceError",
    "PortfolioRepository",
    "StorageError",
]
