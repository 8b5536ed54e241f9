"""
Ledger storage for recorded transactions.

Transactions are kept in a YAML file:

    transactions:
      - id: 5f1c...            # fingerprint
        title: Netflix
        amount: '120.00'
        since: 2021-01-01
        duration: 1m
        repeat: 12
        tags: [tv]
"""

import os
from datetime import date, datetime

import yaml

from .domain import Transaction, format_amount
from .fingerprint import fingerprint
from .logging_setup import get_logger

logger = get_logger('costoflife.ledger')

REQUIRED_FIELDS = ['title', 'amount', 'since']


def transaction_to_record(transaction: Transaction) -> dict:
    """Convert a Transaction into a plain dict ready for YAML."""
    return {
        'id': fingerprint(transaction),
        'title': transaction.title,
        'amount': format_amount(transaction.amount),
        'since': transaction.since,
        'duration': str(transaction.duration),
        'repeat': transaction.repeat,
        'tags': list(transaction.tags),
    }


def transaction_from_record(record: dict) -> Transaction:
    """
    Build a Transaction from a ledger record.

    Raises:
        ValueError: If a required field is missing or invalid
    """
    for field in REQUIRED_FIELDS:
        if field not in record:
            raise ValueError(f"'{field}' is required")

    since = record['since']
    if isinstance(since, datetime):
        since = since.date()
    elif not isinstance(since, date):
        try:
            since = datetime.strptime(str(since), '%Y-%m-%d').date()
        except ValueError:
            raise ValueError(f"Invalid date format: {since}. Use YYYY-MM-DD")

    transaction = Transaction(
        title=str(record['title']),
        amount=str(record['amount']),
        since=since,
        duration=str(record.get('duration', '1d')),
        repeat=int(record.get('repeat', 1)),
        tags=record.get('tags') or [],
    )

    stored_id = record.get('id')
    if stored_id and stored_id != fingerprint(transaction):
        logger.warning("ledger record %r has a stale id, using the recomputed fingerprint",
                       transaction.title)
    return transaction


def load_transactions(path: str) -> list[Transaction]:
    """
    Load transactions from a ledger file.

    Args:
        path: Path to the ledger YAML file

    Returns:
        List of Transaction objects (empty if the file doesn't exist)

    Raises:
        ValueError: If YAML is malformed or a record fails validation
    """
    if not os.path.exists(path):
        logger.debug("ledger %s does not exist yet", path)
        return []

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed ledger file {path}: {e}")

    if not data:
        return []
    if not isinstance(data, dict):
        raise ValueError(f"Malformed ledger file {path}: expected a 'transactions' list")

    transactions = []
    for i, record in enumerate(data.get('transactions') or []):
        try:
            if not isinstance(record, dict):
                raise ValueError("record must be a mapping")
            transactions.append(transaction_from_record(record))
        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Error loading transaction #{i+1} from {path}: {e}")

    logger.debug("loaded %d transactions from %s", len(transactions), path)
    return transactions


def save_transactions(path: str, transactions: list[Transaction]) -> None:
    """
    Write transactions to a ledger file, replacing its content.

    Args:
        path: Path to the ledger YAML file (parent directories are created)
        transactions: Transactions to store
    """
    ordered = sorted(transactions, key=lambda t: (t.since, t.title))
    records = [transaction_to_record(t) for t in ordered]

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump({'transactions': records}, f, sort_keys=False, allow_unicode=True)

    logger.debug("saved %d transactions to %s", len(records), path)


def add_transaction(transactions: list[Transaction], transaction: Transaction) -> tuple[list[Transaction], bool]:
    """
    Add a transaction unless an identical one is already recorded.

    Returns:
        (transactions, added) where added is False for a duplicate
    """
    key = fingerprint(transaction)
    if any(fingerprint(t) == key for t in transactions):
        logger.info("transaction %r already recorded", transaction.title)
        return list(transactions), False
    return list(transactions) + [transaction], True
