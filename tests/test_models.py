"""
Tests for PayPal Liquidity

Test strategy:
1. Unit tests for individual components (models, parser, calculator)
2. Flow tests with in-memory storage
3. No network and no files on disk
"""

import json
from datetime import timedelta

import pytest
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from paypal_liquidity.models.transaction import (
    LiquidityReport,
    TransactionRecord,
    TransactionStatus,
    UploadReceipt,
    UploadValidationResult,
    ValidationIssue,
)
from paypal_liquidity.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestTransactionModels:
    """Tests for transaction-related Pydantic models."""

    def test_transaction_record_defaults(self):
        """Only the id is required; everything else has a type default."""
        tx = TransactionRecord(id="TX1")
        assert tx.date == ""
        assert tx.currency == ""
        assert tx.note == ""
        assert tx.gross == Decimal("0")
        assert tx.balance == Decimal("0")

    def test_transaction_record_rejects_empty_id(self):
        """An empty id is never a valid record."""
        with pytest.raises(ValidationError):
            TransactionRecord(id="")

    def test_transaction_record_is_frozen(self):
        """Records cannot be changed after parsing."""
        tx = TransactionRecord(id="TX1", net=Decimal("10.00"))
        with pytest.raises(ValidationError):
            tx.net = Decimal("20.00")

    def test_transaction_record_accepts_decimal_strings(self):
        """Amounts given as text become exact Decimals."""
        tx = TransactionRecord(id="TX1", gross="100.00", fee="-2.90", net="97.10")
        assert tx.fee == Decimal("-2.90")
        assert tx.net == Decimal("97.10")

    def test_empty_report_is_all_zero(self):
        """A report built from nothing has zero totals and no currencies."""
        report = LiquidityReport()
        assert report.total_net == Decimal("0")
        assert report.final_balance == Decimal("0")
        assert report.transaction_count == 0
        assert report.by_currency == {}

    def test_report_to_dict_is_json_ready(self):
        """to_dict reproduces every field and survives json.dumps."""
        report = LiquidityReport(
            total_gross=Decimal("150.00"),
            total_fees=Decimal("-4.65"),
            total_net=Decimal("145.35"),
            final_balance=Decimal("548.25"),
            transaction_count=2,
            by_currency={"USD": Decimal("145.35")},
            completed_count=2,
        )
        data = report.to_dict()
        assert set(data) == set(LiquidityReport.model_fields)
        assert data["total_net"] == 145.35
        assert data["by_currency"] == {"USD": 145.35}
        assert data["completed_count"] == 2
        json.dumps(data)

    def test_upload_receipt_creation(self):
        """Test UploadReceipt model creation."""
        receipt = UploadReceipt(
            filename="export.csv",
            file_size_bytes=2048,
            transaction_count=12,
        )
        assert receipt.upload_id is not None
        assert receipt.transaction_count == 12
        assert receipt.uploaded_at.tzinfo is not None


class TestTransactionStatus:
    """Tests for the status enum."""

    def test_status_values(self):
        """Test status string values."""
        assert TransactionStatus.COMPLETED.value == "completed"
        assert TransactionStatus.PENDING.value == "pending"
        assert TransactionStatus.REFUNDED.value == "refunded"
        assert TransactionStatus.OTHER.value == "other"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.FILE_UPLOADED,
            description="Test file uploaded",
        )
        assert event.event_type == AuditEventType.FILE_UPLOADED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.utcoffset() == timedelta(0)

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_STORED,
            description="Stored 2 transactions",
            details={"transaction_count": 2},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "transactions_stored"
        assert log_dict["details"]["transaction_count"] == 2

    def test_audit_event_to_row(self):
        """Test conversion to a flat row."""
        event = AuditEventBuilder.parse_failed(
            upload_id=uuid4(),
            reason="empty",
            error_message="CSV file is empty",
            correlation_id=uuid4(),
        )
        row = event.to_row()
        assert len(row) == 11
        assert row[2] == "parse_failed"
        assert row[9] == "empty"
        assert row[10] == "CSV file is empty"

    def test_audit_event_builder_file_uploaded(self):
        """Test AuditEventBuilder.file_uploaded."""
        correlation_id = uuid4()
        upload_id = uuid4()

        event = AuditEventBuilder.file_uploaded(
            upload_id=upload_id,
            filename="export.csv",
            file_size=1024,
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.FILE_UPLOADED
        assert event.entity_id == upload_id
        assert event.correlation_id == correlation_id
        assert event.details["filename"] == "export.csv"

    def test_audit_event_builder_report_calculated(self):
        """Test AuditEventBuilder.report_calculated."""
        event = AuditEventBuilder.report_calculated(
            report_id=uuid4(),
            transaction_count=3,
            completed_only=True,
            correlation_id=uuid4(),
        )

        assert event.event_type == AuditEventType.REPORT_CALCULATED
        assert event.entity_type == "report"
        assert "completed transactions" in event.description

    def test_audit_event_builder_system_error(self):
        """Unexpected errors are recorded at error severity."""
        correlation_id = uuid4()
        event = AuditEventBuilder.system_error(
            error_type="StorageError",
            error_message="store unavailable",
            details={"step": "store"},
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.description == "System error: StorageError"
        assert event.details == {"step": "store"}
        assert event.correlation_id == correlation_id


class TestUploadValidationResult:
    """Tests for UploadValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = UploadValidationResult(
            filename="export.txt",
            file_size_bytes=10,
            issues=[
                ValidationIssue(
                    field="filename",
                    issue_type="invalid_extension",
                    message="File must be CSV",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = UploadValidationResult(
            filename="export.csv",
            file_size_bytes=10,
            issues=[
                ValidationIssue(
                    field="file_size",
                    issue_type="small",
                    message="File is very small",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.is_valid is True

    def test_validation_issue_rejects_unknown_severity(self):
        """Severity is limited to error, warning and info."""
        with pytest.raises(ValueError):
            ValidationIssue(
                field="filename",
                issue_type="x",
                message="x",
                severity="fatal",
            )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
