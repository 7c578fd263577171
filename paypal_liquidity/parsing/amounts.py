"""Free-form amount text to Decimal."""

import re
from decimal import Decimal

from paypal_liquidity.parsing.exceptions import FormatError

# Stripped wherever they appear, so "-$29.90" and "$-29.90" both parse
CURRENCY_GLYPHS = ("$", "€", "£", "¥")
THOUSANDS_SEPARATOR = ","

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Amounts must be below 1e309 in magnitude
MAX_AMOUNT_EXPONENT = 308


def parse_amount(text: str, field: str = "amount") -> Decimal:
    """
    Parse an amount cell such as "$1,000.50" or "-$29.90".

    Blank text, or text that is blank once symbols are stripped, is 0.

    Raises:
        FormatError: if what remains is not a plain signed decimal,
            or its magnitude is 1e309 or more.
    """
    s = text.strip()
    if not s:
        return Decimal("0")

    for glyph in CURRENCY_GLYPHS:
        s = s.replace(glyph, "")
    s = s.replace(THOUSANDS_SEPARATOR, "").strip()

    if not s:
        return Decimal("0")

    if not _DECIMAL_PATTERN.fullmatch(s):
        raise FormatError(
            f"invalid {field} amount: cannot parse amount '{s}'",
            reason="invalid_amount",
            field=field,
        )
    try:
        value = Decimal(s)
    except ArithmeticError as e:
        raise _out_of_range(s, field) from e
    if not value.is_finite() or (value and value.adjusted() > MAX_AMOUNT_EXPONENT):
        raise _out_of_range(s, field)
    return value


def _out_of_range(s: str, field: str) -> FormatError:
    return FormatError(
        f"invalid {field} amount: value out of range '{s}'",
        reason="invalid_amount",
        field=field,
    )
