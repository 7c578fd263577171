"""
Header Matching

Maps vendor-varying column headers onto the fixed set of logical fields.

DESIGN DECISION: The rules are an ordered table of (predicate, field)
pairs rather than a branch cascade. For one header cell the FIRST rule
that matches decides its field. Across the header row the scan runs
left to right and a later column overwrites an earlier one, so the
LAST matching column wins.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Callable, Optional

TRANSACTION_ID = "transaction_id"

LOGICAL_FIELDS = (
    TRANSACTION_ID,
    "date",
    "name",
    "type",
    "status",
    "currency",
    "gross",
    "fee",
    "net",
    "balance",
    "note",
)

HeaderPredicate = Callable[[str], bool]


def _equals_any(*names: str) -> HeaderPredicate:
    accepted = frozenset(names)
    return lambda header: header in accepted


def _contains_all(*parts: str) -> HeaderPredicate:
    return lambda header: all(part in header for part in parts)


def _note_header(header: str) -> bool:
    return "note" in header or "message" in header or header == "item title"


# Evaluated top to bottom against the lower-cased, trimmed header text
HEADER_RULES: tuple[tuple[HeaderPredicate, str], ...] = (
    (_contains_all("transaction", "id"), TRANSACTION_ID),
    (_equals_any("date", "timestamp"), "date"),
    (_equals_any("name", "from name", "to name"), "name"),
    (_equals_any("type", "transaction type"), "type"),
    (_equals_any("status", "transaction status"), "status"),
    (_equals_any("currency", "currency code"), "currency"),
    (_equals_any("gross", "amount", "gross amount"), "gross"),
    (_equals_any("fee", "fee amount"), "fee"),
    (_equals_any("net", "net amount"), "net"),
    (_equals_any("balance", "account balance"), "balance"),
    (_note_header, "note"),
)


def match_header(cell: str) -> Optional[str]:
    """
    Return the logical field a single header cell maps to, if any.

    The cell is lower-cased and trimmed before matching.
    """
    header = cell.strip().lower()
    for predicate, field in HEADER_RULES:
        if predicate(header):
            return field
    return None


class HeaderIndex(Mapping[str, int]):
    """
    Read-only mapping from logical field name to zero-based column position.

    Built once per parse call and never shared across files.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: Mapping[str, int]):
        self._positions = MappingProxyType(dict(positions))

    @classmethod
    def from_header_row(cls, header_row: Iterable[str]) -> "HeaderIndex":
        positions: dict[str, int] = {}
        for position, cell in enumerate(header_row):
            field = match_header(cell)
            if field is not None:
                positions[field] = position
        return cls(positions)

    def __getitem__(self, field: str) -> int:
        return self._positions[field]

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"HeaderIndex({dict(self._positions)!r})"
