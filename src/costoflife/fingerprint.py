"""Transaction fingerprinting for deduplication.

Generates stable SHA-256 hashes from the canonical fields of a transaction so
that the same expense recorded twice maps to the same ledger key.
"""

import hashlib
import json

from .domain import Transaction, format_amount


def canonical_fields(transaction: Transaction) -> list:
    """Return the normalized fields that identify a transaction, in hashing order."""
    return [
        transaction.title,
        format_amount(transaction.amount),
        transaction.since.isoformat(),
        str(transaction.duration),
        str(transaction.repeat),
        list(transaction.tags),
    ]


def fingerprint(transaction: Transaction) -> str:
    """Generate a stable transaction fingerprint.

    Fields are serialized as a JSON array, so separators inside a title or tag
    cannot shift field boundaries.

    Args:
        transaction: Transaction to identify

    Returns:
        SHA-256 hex digest string (64 characters)
    """
    parts = json.dumps(canonical_fields(transaction), ensure_ascii=False, separators=(',', ':'))
    return hashlib.sha256(parts.encode('utf-8')).hexdigest()
