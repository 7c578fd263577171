"""
Data Models Package

This package contains all Pydantic models used by PayPal Liquidity.
Parsed records, reports and audit events all conform to these schemas.
"""

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

__all__ = [
    # Transaction models
    "LiquidityReport",
    "TransactionRecord",
    "TransactionStatus",
    "UploadReceipt",
    "UploadValidationResult",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
