"""
Audit Models for Net Worth Tracker

Every change to the portfolio is logged for audit purposes.
This provides:
1. Traceability of every add, update, delete and snapshot
2. Debugging information when storage fails
3. A record of imports, exports and resets

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from networth.models.types import UtcDatetime, utc_now


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Assets
    ASSET_ADDED = "asset_added"
    ASSET_UPDATED = "asset_updated"
    ASSET_DELETED = "asset_deleted"

    # Liabilities
    LIABILITY_ADDED = "liability_added"
    LIABILITY_UPDATED = "liability_updated"
    LIABILITY_DELETED = "liability_deleted"

    # Snapshots
    SNAPSHOT_CREATED = "snapshot_created"
    SNAPSHOT_DELETED = "snapshot_deleted"

    # Lookups that found nothing
    ENTITY_NOT_FOUND = "entity_not_found"

    # Persistence
    PORTFOLIO_LOADED = "portfolio_loaded"
    PORTFOLIO_EXPORTED = "portfolio_exported"
    PORTFOLIO_IMPORTED = "portfolio_imported"
    IMPORT_REJECTED = "import_rejected"
    PORTFOLIO_CLEARED = "portfolio_cleared"
    STORAGE_FAILED = "storage_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: UtcDatetime = Field(
        default_factory=utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'asset', 'liability', 'snapshot')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one user action"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entity_added("asset", asset_id, "Savings", 5000.0)
        event = AuditEventBuilder.storage_failed("save", str(error))
    """

    @staticmethod
    def entity_added(
        entity_type: str,
        entity_id: UUID,
        name: str,
        value: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType(f"{entity_type}_added"),
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type.capitalize()} added: {name}",
            details={
                "name": name,
                "value": value,
            },
        )

    @staticmethod
    def entity_updated(
        entity_type: str,
        entity_id: UUID,
        fields: list[str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType(f"{entity_type}_updated"),
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type.capitalize()} updated",
            details={"fields": sorted(fields)},
        )

    @staticmethod
    def entity_deleted(
        entity_type: str,
        entity_id: UUID,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType(f"{entity_type}_deleted"),
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
            description=f"{entity_type.capitalize()} deleted",
        )

    @staticmethod
    def entity_not_found(
        entity_type: str,
        entity_id: str,
        operation: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTITY_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            correlation_id=correlation_id,
            description=f"No {entity_type} to {operation}",
            details={
                "requested_id": entity_id,
                "operation": operation,
            },
        )

    @staticmethod
    def snapshot_created(
        snapshot_id: UUID,
        net_worth: float,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_CREATED,
            entity_type="snapshot",
            entity_id=snapshot_id,
            correlation_id=correlation_id,
            description="Snapshot created",
            details={"net_worth": net_worth},
        )

    @staticmethod
    def portfolio_loaded(
        asset_count: int,
        liability_count: int,
        snapshot_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_LOADED,
            entity_type="portfolio",
            description="Portfolio loaded from storage",
            details={
                "assets": asset_count,
                "liabilities": liability_count,
                "snapshots": snapshot_count,
            },
        )

    @staticmethod
    def portfolio_exported(size_bytes: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_EXPORTED,
            entity_type="portfolio",
            description="Portfolio exported",
            details={"size_bytes": size_bytes},
        )

    @staticmethod
    def portfolio_imported(
        asset_count: int,
        liability_count: int,
        snapshot_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_IMPORTED,
            entity_type="portfolio",
            correlation_id=correlation_id,
            description="Portfolio imported",
            details={
                "assets": asset_count,
                "liabilities": liability_count,
                "snapshots": snapshot_count,
            },
        )

    @staticmethod
    def import_rejected(
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="portfolio",
            correlation_id=correlation_id,
            description="Import rejected: data is malformed",
            error_message=error_message,
        )

    @staticmethod
    def portfolio_cleared(correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PORTFOLIO_CLEARED,
            entity_type="portfolio",
            correlation_id=correlation_id,
            description="All portfolio data cleared",
        )

    @staticmethod
    def storage_failed(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Storage {operation} failed",
            error_message=error_message,
            details={"operation": operation},
            correlation_id=correlation_id,
        )
