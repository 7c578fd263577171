"""
Main Orchestrator for PayPal Liquidity

This module ties together all the components and defines the
end-to-end flows for:
1. Ingesting an uploaded export (validate → parse → store)
2. Calculating liquidity over the stored transactions

DESIGN PRINCIPLE: Fail early, fail visibly.
A rejected upload never replaces the stored transactions, and every
failure is audited before it propagates to the caller.
"""

from typing import Optional
from uuid import UUID, uuid4

from paypal_liquidity.audit import AuditLogger, configure_logging, create_correlation_id
from paypal_liquidity.config import get_settings
from paypal_liquidity.liquidity import EmptyInputError, LiquidityCalculator
from paypal_liquidity.models.transaction import (
    LiquidityReport,
    UploadReceipt,
    UploadValidationResult,
)
from paypal_liquidity.parsing import FormatError, PayPalParser
from paypal_liquidity.services.storage import (
    InMemoryAuditStorage,
    InMemoryTransactionStore,
    TransactionStoreInterface,
)
from paypal_liquidity.validation import UploadValidator


class UploadRejectedError(Exception):
    """Upload failed validation before parsing."""

    def __init__(self, result: UploadValidationResult, message: str):
        self.result = result
        super().__init__(message)


class NoTransactionsError(Exception):
    """A report was requested before any transactions were stored."""
    pass


class LiquidityFlow:
    """
    Orchestrates upload ingestion and liquidity reporting.

    GUARANTEES:
    - The stored set only changes after a file parses completely
    - Reports are calculated over one consistent snapshot of the store
    """

    def __init__(
        self,
        store: Optional[TransactionStoreInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[UploadValidator] = None,
        parser: Optional[PayPalParser] = None,
        calculator: Optional[LiquidityCalculator] = None,
    ):
        self._store = store or InMemoryTransactionStore()
        self._audit_logger = audit_logger
        self._validator = validator or UploadValidator()
        self._parser = parser or PayPalParser()
        self._calculator = calculator or LiquidityCalculator()

    async def ingest_upload(
        self,
        filename: str,
        data: bytes,
        correlation_id: Optional[UUID] = None,
    ) -> UploadReceipt:
        """
        Validate, parse and store an uploaded export.

        Returns:
            UploadReceipt describing what was stored

        Raises:
            UploadRejectedError: filename or size checks failed
            FormatError: the content is not a usable export
        """
        correlation_id = correlation_id or create_correlation_id()
        upload_id = uuid4()

        # Step 1: Validate upload metadata
        validation = self._validator.validate(filename, len(data))
        if not validation.is_valid:
            if self._audit_logger:
                issues = [
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in validation.issues
                ]
                await self._audit_logger.log_file_rejected(
                    upload_id=upload_id,
                    filename=filename,
                    issues=issues,
                    correlation_id=correlation_id,
                )
            raise UploadRejectedError(
                validation,
                self._validator.get_user_friendly_summary(validation),
            )

        if self._audit_logger:
            await self._audit_logger.log_file_uploaded(
                upload_id=upload_id,
                filename=filename,
                file_size=len(data),
                correlation_id=correlation_id,
            )

        # Step 2: Parse (all-or-nothing)
        try:
            transactions = self._parser.parse(data)
        except FormatError as e:
            if self._audit_logger:
                await self._audit_logger.log_parse_failed(
                    upload_id=upload_id,
                    reason=e.reason,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise
        except Exception as e:
            await self._log_unexpected(e, "parse", correlation_id, upload_id=str(upload_id))
            raise

        if self._audit_logger:
            await self._audit_logger.log_parse_completed(
                upload_id=upload_id,
                transaction_count=len(transactions),
                correlation_id=correlation_id,
            )

        # Step 3: Replace the stored set
        try:
            replaced = self._store.set_transactions(transactions)
        except Exception as e:
            await self._log_unexpected(e, "store", correlation_id, upload_id=str(upload_id))
            raise

        if self._audit_logger:
            await self._audit_logger.log_transactions_stored(
                upload_id=upload_id,
                transaction_count=len(transactions),
                replaced_count=replaced,
                correlation_id=correlation_id,
            )

        return UploadReceipt(
            upload_id=upload_id,
            filename=filename,
            file_size_bytes=len(data),
            transaction_count=len(transactions),
        )

    async def get_liquidity(
        self,
        completed_only: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> LiquidityReport:
        """
        Calculate liquidity over the stored transactions.

        Args:
            completed_only: Only count completed-class transactions

        Raises:
            NoTransactionsError: nothing has been uploaded yet
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            transactions = self._store.get_transactions()
        except Exception as e:
            await self._log_unexpected(e, "load", correlation_id)
            raise

        if not transactions:
            message = "No transactions available. Please upload a CSV first."
            if self._audit_logger:
                await self._audit_logger.log_report_failed(
                    error_message=message,
                    completed_only=completed_only,
                    correlation_id=correlation_id,
                )
            raise NoTransactionsError(message)

        try:
            if completed_only:
                report = self._calculator.calculate_for_completed(transactions)
            else:
                report = self._calculator.calculate(transactions)
        except EmptyInputError as e:
            if self._audit_logger:
                await self._audit_logger.log_report_failed(
                    error_message=str(e),
                    completed_only=completed_only,
                    correlation_id=correlation_id,
                )
            raise
        except Exception as e:
            await self._log_unexpected(e, "calculate", correlation_id, completed_only=completed_only)
            raise

        if self._audit_logger:
            await self._audit_logger.log_report_calculated(
                report_id=uuid4(),
                transaction_count=report.transaction_count,
                completed_only=completed_only,
                correlation_id=correlation_id,
            )

        return report

    async def _log_unexpected(
        self,
        error: Exception,
        step: str,
        correlation_id: UUID,
        **details,
    ) -> None:
        """Audit an error no flow step expects, before it propagates."""
        if self._audit_logger:
            await self._audit_logger.log_error(
                error_type=type(error).__name__,
                error_message=str(error),
                details={"step": step, **details},
                correlation_id=correlation_id,
            )


def create_app_components(
    configure_logs: bool = True,
) -> tuple[LiquidityFlow, InMemoryAuditStorage]:
    """
    Factory function to create all application components.

    Args:
        configure_logs: Whether to configure structlog from settings.
                        Hosts that configure logging themselves pass False.

    Returns:
        (liquidity_flow, audit_storage)
    """
    settings = get_settings()
    if configure_logs:
        configure_logging(settings.logging, debug=settings.app.debug_mode)

    audit_storage = InMemoryAuditStorage()
    audit_logger = AuditLogger(audit_storage)

    flow = LiquidityFlow(
        store=InMemoryTransactionStore(),
        audit_logger=audit_logger,
        validator=UploadValidator(settings.upload),
    )

    return flow, audit_storage
