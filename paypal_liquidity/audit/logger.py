"""
Audit Logger

DESIGN DECISION: Every upload and every report calculation is logged.
This provides:
1. Traceability from a report back to the file behind it
2. A visible reason for every rejected export
3. Debugging capability

The audit logger:
- Is async so it fits the flows that call it
- Gracefully handles storage failures (a broken audit backend never
  breaks an upload or a report)
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from paypal_liquidity.config import LoggingSettings
from paypal_liquidity.models.audit import AuditEvent, AuditEventBuilder
from paypal_liquidity.services.storage import AuditStorageInterface


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    debug: bool = False,
) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        settings: Level and renderer. Defaults to the environment.
        debug: Force DEBUG level whatever settings.level says.

    Safe to call more than once; the last call wins.
    """
    settings = settings or LoggingSettings()
    level = logging.DEBUG if debug else getattr(logging, settings.level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )

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
            renderer,
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
    2. Audit storage, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for the audit trail.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("paypal_liquidity.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_file_uploaded(
        self,
        upload_id: UUID,
        filename: str,
        file_size: int,
        correlation_id: UUID,
    ) -> None:
        """Log an accepted upload."""
        event = AuditEventBuilder.file_uploaded(
            upload_id=upload_id,
            filename=filename,
            file_size=file_size,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_file_rejected(
        self,
        upload_id: UUID,
        filename: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log an upload that failed validation."""
        event = AuditEventBuilder.file_rejected(
            upload_id=upload_id,
            filename=filename,
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_parse_completed(
        self,
        upload_id: UUID,
        transaction_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.parse_completed(
            upload_id=upload_id,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_parse_failed(
        self,
        upload_id: UUID,
        reason: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.parse_failed(
            upload_id=upload_id,
            reason=reason,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_transactions_stored(
        self,
        upload_id: UUID,
        transaction_count: int,
        replaced_count: int,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.transactions_stored(
            upload_id=upload_id,
            transaction_count=transaction_count,
            replaced_count=replaced_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_report_calculated(
        self,
        report_id: UUID,
        transaction_count: int,
        completed_only: bool,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.report_calculated(
            report_id=report_id,
            transaction_count=transaction_count,
            completed_only=completed_only,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_report_failed(
        self,
        error_message: str,
        completed_only: bool,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.report_failed(
            error_message=error_message,
            completed_only=completed_only,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unexpected error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new action (e.g., a file upload).
    Pass it through all subsequent operations.
    """
    return uuid4()
