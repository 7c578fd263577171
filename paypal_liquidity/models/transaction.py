"""
Core Data Models for PayPal Liquidity

These models define the schemas for data flowing between the parser,
the liquidity calculator and the service layer around them.
They are designed to:
1. Be immutable once built (frozen models)
2. Keep money as Decimal so sums are exact and order-independent
3. Be serializable for logging and for any outer wire format

DESIGN DECISION: Parsed records carry type defaults ("" and 0) rather
than None. A column missing from the export and an empty cell mean the
same thing to every downstream consumer.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionStatus(str, Enum):
    """
    Normalized transaction status bucket.

    Raw export statuses vary by vendor and locale; they are folded
    into these four values by liquidity.status.normalize_status.
    OTHER is counted in totals but in none of the status counters.
    """
    COMPLETED = "completed"
    PENDING = "pending"
    REFUNDED = "refunded"
    OTHER = "other"


# =============================================================================
# TRANSACTION RECORD
# =============================================================================

class TransactionRecord(BaseModel):
    """
    One parsed row of a transaction export.

    Only the identifier is required. Uniqueness of ids is NOT enforced;
    duplicated rows in an export pass through as separate records.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Transaction identifier (trimmed, non-empty)"
    )
    date: str = Field(default="", description="Date or timestamp text as exported")
    name: str = Field(default="", description="Counterparty name")
    type: str = Field(default="", description="Transaction type as exported")
    status: str = Field(default="", description="Raw status text")
    currency: str = Field(default="", description="Currency code")
    gross: Decimal = Field(default=Decimal("0"), description="Gross amount")
    fee: Decimal = Field(default=Decimal("0"), description="Fee amount (usually negative)")
    net: Decimal = Field(default=Decimal("0"), description="Net amount")
    balance: Decimal = Field(
        default=Decimal("0"),
        description="Running account balance; 0 means the export had none"
    )
    note: str = Field(default="", description="Note, message or item title")


# =============================================================================
# LIQUIDITY REPORT
# =============================================================================

class LiquidityReport(BaseModel):
    """
    Aggregate over a set of transaction records.

    A report built from no records at all has every field at zero
    and an empty currency breakdown.
    """
    model_config = ConfigDict(frozen=True)

    total_gross: Decimal = Decimal("0")
    total_fees: Decimal = Decimal("0")
    total_net: Decimal = Decimal("0")
    final_balance: Decimal = Field(
        default=Decimal("0"),
        description="Largest non-zero balance seen, else total_net"
    )
    transaction_count: int = Field(default=0, ge=0)
    by_currency: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Summed net amount per currency code"
    )
    completed_count: int = Field(default=0, ge=0)
    pending_count: int = Field(default=0, ge=0)
    refunded_count: int = Field(default=0, ge=0)

    def to_dict(self) -> dict:
        """
        Convert to a JSON-ready dictionary.

        Field names match the model one-for-one; amounts become floats.
        """
        return {
            "total_gross": float(self.total_gross),
            "total_fees": float(self.total_fees),
            "total_net": float(self.total_net),
            "final_balance": float(self.final_balance),
            "transaction_count": self.transaction_count,
            "by_currency": {
                currency: float(amount)
                for currency, amount in self.by_currency.items()
            },
            "completed_count": self.completed_count,
            "pending_count": self.pending_count,
            "refunded_count": self.refunded_count,
        }


# =============================================================================
# UPLOAD MODELS
# =============================================================================

class UploadReceipt(BaseModel):
    """Result of an accepted upload: what was stored and when."""
    model_config = ConfigDict(frozen=True)

    upload_id: UUID = Field(
        default_factory=uuid4,
        description="Unique upload identifier"
    )
    uploaded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    filename: str
    file_size_bytes: int = Field(ge=0)
    transaction_count: int = Field(ge=0)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_extension', 'too_large')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class UploadValidationResult(BaseModel):
    """Result of checking an upload before it is parsed."""

    filename: str
    file_size_bytes: int = Field(ge=0)
    validated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def is_valid(self) -> bool:
        """Valid when no error-level issue was found."""
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
