"""Transaction export parsing package."""

from paypal_liquidity.parsing.amounts import parse_amount
from paypal_liquidity.parsing.exceptions import FormatError
from paypal_liquidity.parsing.headers import (
    HEADER_RULES,
    LOGICAL_FIELDS,
    HeaderIndex,
    match_header,
)
from paypal_liquidity.parsing.paypal_parser import PayPalParser, parse_transactions

__all__ = [
    "FormatError",
    "HEADER_RULES",
    "HeaderIndex",
    "LOGICAL_FIELDS",
    "PayPalParser",
    "match_header",
    "parse_amount",
    "parse_transactions",
]
