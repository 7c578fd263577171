"""Errors raised while parsing a transaction export."""

from typing import Optional


class FormatError(Exception):
    """
    The export cannot be turned into transaction records.

    Always fatal for the whole parse call: no partial record list is
    returned alongside it. The only recovery is a corrected file.

    Attributes:
        reason: Stable short code for the failure, e.g. "empty",
            "missing_transaction_id", "invalid_amount".
        row_number: 1-based row in the file, for row-level failures.
        field: Logical field involved, when there is one.
    """

    def __init__(
        self,
        message: str,
        reason: str,
        row_number: Optional[int] = None,
        field: Optional[str] = None,
    ):
        self.reason = reason
        self.row_number = row_number
        self.field = field
        super().__init__(message)
