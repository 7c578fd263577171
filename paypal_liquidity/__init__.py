"""
PayPal Liquidity - Source Package

Parses PayPal-style transaction exports and summarizes liquidity:
totals, per-currency net, status counts and a final balance estimate.

DESIGN PRINCIPLES:
1. Header matching is a fixed rule table, never inferred
2. Parsing is all-or-nothing: no partial results
3. Money is Decimal end to end
4. The parser and calculator are pure; state lives only in the store
"""

from paypal_liquidity.liquidity import (
    EmptyInputError,
    LiquidityCalculator,
    aggregate,
    aggregate_completed_only,
)
from paypal_liquidity.models import LiquidityReport, TransactionRecord, TransactionStatus
from paypal_liquidity.parsing import FormatError, PayPalParser, parse_transactions

__version__ = "1.0.0"

__all__ = [
    "EmptyInputError",
    "FormatError",
    "LiquidityCalculator",
    "LiquidityReport",
    "PayPalParser",
    "TransactionRecord",
    "TransactionStatus",
    "aggregate",
    "aggregate_completed_only",
    "parse_transactions",
]
