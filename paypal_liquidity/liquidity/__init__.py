"""Liquidity calculation package."""

from paypal_liquidity.liquidity.calculator import (
    EmptyInputError,
    LiquidityCalculator,
    aggregate,
    aggregate_completed_only,
)
from paypal_liquidity.liquidity.status import STATUS_ALIASES, normalize_status

__all__ = [
    "EmptyInputError",
    "LiquidityCalculator",
    "STATUS_ALIASES",
    "aggregate",
    "aggregate_completed_only",
    "normalize_status",
]
