"""Raw export status text to a TransactionStatus bucket."""

from paypal_liquidity.models.transaction import TransactionStatus

# Exact spellings seen in exports. Matching is by exact string,
# so e.g. "COMPLETED" or "Completed " fall through to OTHER.
STATUS_ALIASES: dict[TransactionStatus, frozenset[str]] = {
    TransactionStatus.COMPLETED: frozenset(
        {"Completed", "completed", "Complete", "Success", "success"}
    ),
    TransactionStatus.PENDING: frozenset(
        {"Pending", "pending", "In Progress", "Processing"}
    ),
    TransactionStatus.REFUNDED: frozenset(
        {"Refunded", "refunded", "Reversed", "Cancelled", "cancelled"}
    ),
}

_STATUS_LOOKUP: dict[str, TransactionStatus] = {
    raw: status
    for status, aliases in STATUS_ALIASES.items()
    for raw in aliases
}


def normalize_status(raw_status: str) -> TransactionStatus:
    """Map raw status text to its bucket; unknown text is OTHER."""
    return _STATUS_LOOKUP.get(raw_status, TransactionStatus.OTHER)
