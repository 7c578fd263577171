"""
PayPal-style CSV Parser

Turns the raw bytes of a transaction export into TransactionRecords.

This parser handles:
1. Decoding (UTF-8, with or without a byte-order mark)
2. Rows of varying width (short rows keep field defaults)
3. Header synonyms across export variants (see parsing.headers)
4. Free-form amounts with currency glyphs and thousands separators

CRITICAL: Parsing is all-or-nothing. The first malformed row aborts
the whole file. We do NOT skip bad rows and return the rest, since a
silently shortened transaction list produces a wrong liquidity figure.
"""

import csv
import io
from typing import Optional, Union

import structlog

from paypal_liquidity.models.transaction import TransactionRecord
from paypal_liquidity.parsing.amounts import parse_amount
from paypal_liquidity.parsing.exceptions import FormatError
from paypal_liquidity.parsing.headers import TRANSACTION_ID, HeaderIndex

logger = structlog.get_logger(__name__)

TEXT_FIELDS = ("date", "name", "type", "status", "currency", "note")
AMOUNT_FIELDS = ("gross", "fee", "net", "balance")

_BOM = "\ufeff"


class PayPalParser:
    """
    Parser for PayPal-style transaction CSV exports.

    Stateless: one instance can serve any number of concurrent parse
    calls, each of which builds its own HeaderIndex.
    """

    def parse(self, data: Union[bytes, str]) -> list[TransactionRecord]:
        """
        Parse an export into records, in file row order.

        Args:
            data: Raw file bytes, or already-decoded text.

        Returns:
            One record per non-empty data row.

        Raises:
            FormatError: empty file, unreadable CSV, missing transaction id
                column, empty transaction id, or a non-numeric amount.
        """
        try:
            return self._parse(data)
        except FormatError as e:
            logger.warning(
                "csv_parse_failed",
                reason=e.reason,
                row_number=e.row_number,
                field=e.field,
                error=str(e),
            )
            raise

    def _parse(self, data: Union[bytes, str]) -> list[TransactionRecord]:
        rows = self._read_rows(self._decode(data))

        if not rows:
            raise FormatError("CSV file is empty", reason="empty")

        _, header = rows[0]
        index = HeaderIndex.from_header_row(header)
        if TRANSACTION_ID not in index:
            raise FormatError(
                f"CSV missing required field: {TRANSACTION_ID} (Transaction ID)",
                reason="missing_transaction_id",
                field=TRANSACTION_ID,
            )

        transactions: list[TransactionRecord] = []
        skipped = 0
        for line_number, row in rows[1:]:
            if all(not cell.strip() for cell in row):
                skipped += 1
                continue
            try:
                transactions.append(self._parse_row(row, index))
            except FormatError as e:
                raise FormatError(
                    f"error parsing row {line_number}: {e}",
                    reason=e.reason,
                    row_number=line_number,
                    field=e.field,
                ) from e

        logger.debug(
            "csv_parsed",
            columns=dict(index),
            transaction_count=len(transactions),
            empty_rows_skipped=skipped,
        )
        return transactions

    def _decode(self, data: Union[bytes, str]) -> str:
        if isinstance(data, str):
            return data[1:] if data.startswith(_BOM) else data
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FormatError(
                f"failed to read CSV: file is not valid UTF-8 text ({e.reason})",
                reason="unreadable",
            ) from e

    def _read_rows(self, text: str) -> list[tuple[int, list[str]]]:
        """
        Read every non-blank record, paired with the 1-based line it starts on.

        A quoted cell may span lines, so reader.line_num (the record's last
        line) is only used to find where the next record starts.
        """
        reader = csv.reader(io.StringIO(text, newline=""), skipinitialspace=True)
        rows = []
        start_line = 1
        try:
            for row in reader:
                if row:
                    rows.append((start_line, row))
                start_line = reader.line_num + 1
        except csv.Error as e:
            raise FormatError(
                f"failed to read CSV: {e}",
                reason="unreadable",
                row_number=start_line,
            ) from e
        return rows

    def _parse_row(self, row: list[str], index: HeaderIndex) -> TransactionRecord:
        transaction_id = _cell(row, index, TRANSACTION_ID)
        if transaction_id is None:
            raise FormatError(
                "transaction id not found",
                reason="transaction_id_not_found",
                field=TRANSACTION_ID,
            )
        transaction_id = transaction_id.strip()
        if not transaction_id:
            raise FormatError(
                "transaction id is empty",
                reason="empty_transaction_id",
                field=TRANSACTION_ID,
            )

        values: dict = {"id": transaction_id}
        for field in TEXT_FIELDS:
            cell = _cell(row, index, field)
            if cell is not None:
                values[field] = cell.strip()
        for field in AMOUNT_FIELDS:
            cell = _cell(row, index, field)
            if cell is not None:
                values[field] = parse_amount(cell, field)

        return TransactionRecord(**values)


def _cell(row: list[str], index: HeaderIndex, field: str) -> Optional[str]:
    """Raw cell text for a field, or None if unmapped or past the row's end."""
    position = index.get(field)
    if position is None or position >= len(row):
        return None
    return row[position]


def parse_transactions(data: Union[bytes, str]) -> list[TransactionRecord]:
    """Parse an export with a default PayPalParser."""
    return PayPalParser().parse(data)
