"""
Data Models Package

This package contains the pydantic models and the Portfolio aggregate.
All data persisted or exported by the tracker conforms to these schemas.
"""

from networth.models.asset import Asset
from networth.models.liability import Liability
from networth.models.portfolio import Portfolio, PortfolioState
from networth.models.snapshot import Snapshot
from networth.models.types import (
    LIQUID_ASSET_TYPES,
    AssetType,
    CryptoDetails,
    CryptoType,
    LiabilityType,
    LoanDetails,
    MetalDetails,
    MetalUnit,
    RecurringDetails,
)
from networth.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Instruments
    "Asset",
    "AssetType",
    "CryptoDetails",
    "CryptoType",
    "LIQUID_ASSET_TYPES",
    "Liability",
    "LiabilityType",
    "LoanDetails",
    "MetalDetails",
    "MetalUnit",
    "RecurringDetails",
    # Aggregate
    "Portfolio",
    "PortfolioState",
    "Snapshot",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
