"""
Audit Logger

DESIGN DECISION: Every change to the portfolio is logged.
This provides:
1. Traceability of what changed and when
2. Debugging capability when storage misbehaves
3. A recent-history view for the user

The audit logger:
- Writes structured JSON through structlog
- Keeps a bounded in-memory trail of recent events
- Supports correlation IDs to trace related events
"""

from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from networth.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.
    
    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory trail (for showing recent history)
    """
    
    def __init__(self, max_events: int = 500):
        """
        Initialize audit logger.
        
        Args:
            max_events: How many recent events the in-memory trail keeps.
        """
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._logger = structlog.get_logger("networth.audit")
    
    async def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and append it to the trail."""
        log_dict = event.to_log_dict()
        
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)
        
        self._events.append(event)
    
    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._events))[:limit]
    
    async def log_entity_added(
        self,
        entity_type: str,
        entity_id: UUID,
        name: str,
        value: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new asset or liability."""
        await self.log(AuditEventBuilder.entity_added(
            entity_type=entity_type,
            entity_id=entity_id,
            name=name,
            value=value,
            correlation_id=correlation_id,
        ))
    
    async def log_entity_updated(
        self,
        entity_type: str,
        entity_id: UUID,
        fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a partial update."""
        await self.log(AuditEventBuilder.entity_updated(
            entity_type=entity_type,
            entity_id=entity_id,
            fields=fields,
            correlation_id=correlation_id,
        ))
    
    async def log_entity_deleted(
        self,
        entity_type: str,
        entity_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a deletion."""
        await self.log(AuditEventBuilder.entity_deleted(
            entity_type=entity_type,
            entity_id=entity_id,
            correlation_id=correlation_id,
        ))
    
    async def log_not_found(
        self,
        entity_type: str,
        entity_id: str,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an update/delete that targeted an unknown id."""
        await self.log(AuditEventBuilder.entity_not_found(
            entity_type=entity_type,
            entity_id=entity_id,
            operation=operation,
            correlation_id=correlation_id,
        ))
    
    async def log_snapshot_created(
        self,
        snapshot_id: UUID,
        net_worth: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log snapshot creation."""
        await self.log(AuditEventBuilder.snapshot_created(
            snapshot_id=snapshot_id,
            net_worth=net_worth,
            correlation_id=correlation_id,
        ))
    
    async def log_portfolio_loaded(
        self,
        asset_count: int,
        liability_count: int,
        snapshot_count: int,
    ) -> None:
        """Log a successful load at startup."""
        await self.log(AuditEventBuilder.portfolio_loaded(
            asset_count=asset_count,
            liability_count=liability_count,
            snapshot_count=snapshot_count,
        ))
    
    async def log_exported(self, size_bytes: int) -> None:
        """Log an export."""
        await self.log(AuditEventBuilder.portfolio_exported(size_bytes))
    
    async def log_imported(
        self,
        asset_count: int,
        liability_count: int,
        snapshot_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful import."""
        await self.log(AuditEventBuilder.portfolio_imported(
            asset_count=asset_count,
            liability_count=liability_count,
            snapshot_count=snapshot_count,
            correlation_id=correlation_id,
        ))
    
    async def log_import_rejected(
        self,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a malformed import."""
        await self.log(AuditEventBuilder.import_rejected(
            error_message=error_message,
            correlation_id=correlation_id,
        ))
    
    async def log_cleared(self, correlation_id: Optional[UUID] = None) -> None:
        """Log a full reset."""
        await self.log(AuditEventBuilder.portfolio_cleared(correlation_id))
    
    async def log_storage_failed(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a storage failure."""
        await self.log(AuditEventBuilder.storage_failed(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.
    
    Use this at the start of a user action and pass it through
    every step of that action.
    """
    return uuid4()
