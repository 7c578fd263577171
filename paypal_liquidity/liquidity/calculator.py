"""
Liquidity Calculation Engine

DESIGN DECISION: Calculation is a pure, single pass over records the
caller already holds. It performs no I/O and keeps no state between
calls, so the same input always yields an identical report and any
number of requests can calculate concurrently.

Money is summed as Decimal. Decimal addition is exact, which is what
makes the report independent of record order.
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import Optional

import structlog

from paypal_liquidity.liquidity.status import normalize_status
from paypal_liquidity.models.transaction import (
    LiquidityReport,
    TransactionRecord,
    TransactionStatus,
)

logger = structlog.get_logger(__name__)


class EmptyInputError(Exception):
    """No transactions were given to calculate over."""
    pass


class LiquidityCalculator:
    """
    Reduces transaction records to a LiquidityReport.

    GUARANTEES:
    - Never mutates the input sequence
    - transaction_count equals the number of records calculated over
    - total_net equals the sum of every record's net, whatever its
      currency or status
    """

    def calculate(self, transactions: Sequence[TransactionRecord]) -> LiquidityReport:
        """
        Calculate liquidity over every given record.

        Raises:
            EmptyInputError: if there are no records.
        """
        if not transactions:
            raise EmptyInputError("no transactions to calculate")

        total_gross = Decimal("0")
        total_fees = Decimal("0")
        total_net = Decimal("0")
        by_currency: dict[str, Decimal] = {}
        status_counts = {
            TransactionStatus.COMPLETED: 0,
            TransactionStatus.PENDING: 0,
            TransactionStatus.REFUNDED: 0,
        }
        max_balance: Optional[Decimal] = None

        for tx in transactions:
            total_gross += tx.gross
            total_fees += tx.fee
            total_net += tx.net

            if tx.currency:
                by_currency[tx.currency] = by_currency.get(tx.currency, Decimal("0")) + tx.net

            # A zero balance means the export had no balance for this row
            if tx.balance != 0 and (max_balance is None or tx.balance > max_balance):
                max_balance = tx.balance

            status = normalize_status(tx.status)
            if status in status_counts:
                status_counts[status] += 1

        report = LiquidityReport(
            total_gross=total_gross,
            total_fees=total_fees,
            total_net=total_net,
            final_balance=max_balance if max_balance is not None else total_net,
            transaction_count=len(transactions),
            by_currency=by_currency,
            completed_count=status_counts[TransactionStatus.COMPLETED],
            pending_count=status_counts[TransactionStatus.PENDING],
            refunded_count=status_counts[TransactionStatus.REFUNDED],
        )

        logger.debug(
            "liquidity_calculated",
            transaction_count=report.transaction_count,
            currencies=sorted(by_currency),
            balance_from_export=max_balance is not None,
        )
        return report

    def calculate_for_completed(
        self,
        transactions: Sequence[TransactionRecord],
    ) -> LiquidityReport:
        """
        Calculate liquidity over completed-class records only.

        Unlike calculate(), having nothing to calculate over is not an
        error here: the result is an all-zero report.
        """
        completed = [
            tx for tx in transactions
            if normalize_status(tx.status) is TransactionStatus.COMPLETED
        ]

        if not completed:
            return LiquidityReport()

        return self.calculate(completed)


def aggregate(transactions: Sequence[TransactionRecord]) -> LiquidityReport:
    """Calculate a report over all records with a default calculator."""
    return LiquidityCalculator().calculate(transactions)


def aggregate_completed_only(transactions: Sequence[TransactionRecord]) -> LiquidityReport:
    """Calculate a report over completed records with a default calculator."""
    return LiquidityCalculator().calculate_for_completed(transactions)
