"""
Audit Models for PayPal Liquidity

Every upload and every report calculation is logged for audit purposes.
This provides:
1. Traceability from a report back to the file it was computed from
2. Debugging information when an export is rejected
3. A record of which files replaced the stored transaction set

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each step of the ingest and report flows has its own event type.
    """
    # Upload handling
    FILE_UPLOADED = "file_uploaded"
    FILE_REJECTED = "file_rejected"

    # Parsing
    PARSE_COMPLETED = "parse_completed"
    PARSE_FAILED = "parse_failed"

    # Storage
    TRANSACTIONS_STORED = "transactions_stored"

    # Liquidity calculation
    REPORT_CALCULATED = "report_calculated"
    REPORT_FAILED = "report_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


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
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
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
        description="Type of entity (e.g., 'upload', 'report')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events in one upload)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
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
            "error_code": self.error_code,
            "error_message": self.error_message,
        }

    def to_row(self) -> list[str]:
        """
        Convert to a flat row of strings for tabular audit exports.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, entity_type, entity_id,
         correlation_id, description, details_json, error_code, error_message]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            str(self.entity_id) if self.entity_id else "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_code or "",
            self.error_message or "",
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.file_uploaded(upload_id, filename, size, correlation_id)
        event = AuditEventBuilder.report_calculated(report_id, 12, False, correlation_id)
    """

    @staticmethod
    def file_uploaded(
        upload_id: UUID,
        filename: str,
        file_size: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILE_UPLOADED,
            entity_type="upload",
            entity_id=upload_id,
            correlation_id=correlation_id,
            description=f"File uploaded: {filename}",
            details={
                "filename": filename,
                "file_size_bytes": file_size,
            },
        )

    @staticmethod
    def file_rejected(
        upload_id: UUID,
        filename: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="upload",
            entity_id=upload_id,
            correlation_id=correlation_id,
            description=f"File rejected with {len(issues)} issues: {filename}",
            details={
                "filename": filename,
                "issues": issues,
            },
        )

    @staticmethod
    def parse_completed(
        upload_id: UUID,
        transaction_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARSE_COMPLETED,
            entity_type="upload",
            entity_id=upload_id,
            correlation_id=correlation_id,
            description=f"Parsed {transaction_count} transactions",
            details={
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def parse_failed(
        upload_id: UUID,
        reason: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARSE_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="upload",
            entity_id=upload_id,
            correlation_id=correlation_id,
            description=f"Export could not be parsed: {reason}",
            error_code=reason,
            error_message=error_message,
        )

    @staticmethod
    def transactions_stored(
        upload_id: UUID,
        transaction_count: int,
        replaced_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_STORED,
            entity_type="upload",
            entity_id=upload_id,
            correlation_id=correlation_id,
            description=(
                f"Stored {transaction_count} transactions "
                f"(replaced {replaced_count})"
            ),
            details={
                "transaction_count": transaction_count,
                "replaced_count": replaced_count,
            },
        )

    @staticmethod
    def report_calculated(
        report_id: UUID,
        transaction_count: int,
        completed_only: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        scope = "completed transactions" if completed_only else "all transactions"
        return AuditEvent(
            event_type=AuditEventType.REPORT_CALCULATED,
            entity_type="report",
            entity_id=report_id,
            correlation_id=correlation_id,
            description=f"Liquidity calculated over {transaction_count} {scope}",
            details={
                "transaction_count": transaction_count,
                "completed_only": completed_only,
            },
        )

    @staticmethod
    def report_failed(
        error_message: str,
        completed_only: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="report",
            correlation_id=correlation_id,
            description="Liquidity calculation failed",
            error_message=error_message,
            details={
                "completed_only": completed_only,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
