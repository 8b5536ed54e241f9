"""
Cost of life calculations.

Aggregates the per-diem cost of recorded transactions: daily cost of life,
per-transaction summary, per-tag breakdown and search.
"""

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .amortization import evaluate, is_active_on, per_diem_raw
from .domain import CENTS, Transaction, format_amount, normalize_tag


def calculate_cost_of_life(transactions: list[Transaction], on: date) -> Decimal:
    """
    Calculate the cost of life for one day.

    Unrounded per-diems of all transactions active on the day are summed,
    then the total is rounded to cents.

    Args:
        transactions: List of Transaction objects
        on: Day to calculate for

    Returns:
        Total daily cost, rounded to cents
    """
    total = sum(
        (per_diem_raw(t) for t in transactions if is_active_on(t, on)),
        Decimal(0),
    )
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def summarize_transactions(transactions: list[Transaction], on: date) -> list[dict]:
    """
    Summarize the transactions active on a day.

    Args:
        transactions: List of Transaction objects
        on: Reference day

    Returns:
        List of dicts (title, amount, per_diem, progress, cost_to_date, since,
        ends_on, tags) sorted by progress, most advanced first
    """
    rows = []
    for transaction in transactions:
        if not is_active_on(transaction, on):
            continue
        result = evaluate(transaction, on)
        rows.append({
            'title': transaction.title,
            'amount': transaction.amount,
            'per_diem': result.per_diem,
            'progress': result.progress_ratio,
            'cost_to_date': result.cost_to_date,
            'since': result.since,
            'ends_on': result.ends_on,
            'tags': list(transaction.tags),
        })

    rows.sort(key=lambda r: (-r['progress'], r['title']))
    return rows


def summarize_tags(transactions: list[Transaction], on: date) -> list[dict]:
    """
    Break down the cost of life of a day by tag.

    A transaction with several tags counts toward each of them, so shares
    can add up to more than 1.

    Args:
        transactions: List of Transaction objects
        on: Reference day

    Returns:
        List of dicts (tag, count, per_diem, share) sorted by per_diem, highest first
    """
    counts = defaultdict(int)
    costs = defaultdict(Decimal)

    for transaction in transactions:
        if not is_active_on(transaction, on):
            continue
        daily = per_diem_raw(transaction)
        for tag in transaction.tags:
            counts[tag] += 1
            costs[tag] += daily

    total = calculate_cost_of_life(transactions, on)

    rows = []
    for tag, cost in costs.items():
        per_diem = cost.quantize(CENTS, rounding=ROUND_HALF_UP)
        rows.append({
            'tag': tag,
            'count': counts[tag],
            'per_diem': per_diem,
            'share': float(per_diem / total) if total else 0.0,
        })

    rows.sort(key=lambda r: (-r['per_diem'], r['tag']))
    return rows


def search_transactions(transactions: list[Transaction], pattern: str) -> list[Transaction]:
    """
    Find transactions whose title or tags match every word of a pattern.

    Matching is case-insensitive and by substring; pattern words may carry
    a tag marker (``#food`` or ``.food``).

    Args:
        transactions: List of Transaction objects
        pattern: Space-separated search words

    Returns:
        Matching transactions, oldest first
    """
    words = [normalize_tag(w) for w in pattern.split()]
    words = [w for w in words if w]
    if not words:
        return []

    matches = []
    for transaction in transactions:
        haystack = [w.lower() for w in transaction.title.split()] + list(transaction.tags)
        if all(any(word in item for item in haystack) for word in words):
            matches.append(transaction)

    return sorted(matches, key=lambda t: (t.since, t.title))


# =============================================================================
# TEXT FORMATTING
# =============================================================================

def format_money(amount: Decimal, currency_symbol: str = '€') -> str:
    """Format an amount as ``'1,234.50€'``."""
    return f"{amount.quantize(CENTS):,}{currency_symbol}"


def format_summary(rows: list[dict], on: date, total: Optional[Decimal] = None,
                   currency_symbol: str = '€') -> str:
    """
    Format a transaction summary as a text table.

    Args:
        rows: Result from summarize_transactions()
        on: Reference day
        total: Optional cost of life for the day
        currency_symbol: Symbol appended to amounts

    Returns:
        Formatted string
    """
    lines = [f"Cost of life on {on.isoformat()}", "=" * 70]

    if not rows:
        lines.append("No active expenses.")
        return '\n'.join(lines)

    lines.append(f"{'Item':<30} {'Price':>12} {'Diem':>10} {'Progress':>10}  {'Ends':<10}")
    lines.append("-" * 70)
    for row in rows:
        title = row['title'] if len(row['title']) <= 30 else row['title'][:29] + '…'
        lines.append(
            f"{title:<30} "
            f"{format_money(row['amount'], currency_symbol):>12} "
            f"{format_money(row['per_diem'], currency_symbol):>10} "
            f"{row['progress']:>10.1%}  "
            f"{row['ends_on'].isoformat():<10}"
        )

    if total is not None:
        lines.append("=" * 70)
        lines.append(f"Daily cost of life: {format_money(total, currency_symbol)}")

    return '\n'.join(lines)


def format_tag_summary(rows: list[dict], on: date, currency_symbol: str = '€') -> str:
    """Format a tag breakdown (from summarize_tags()) as a text table."""
    lines = [f"Cost of life by tag on {on.isoformat()}", "=" * 60]

    if not rows:
        lines.append("No tagged expenses.")
        return '\n'.join(lines)

    lines.append(f"{'Tag':<30} {'Count':>6} {'Diem':>10} {'Share':>10}")
    lines.append("-" * 60)
    for row in rows:
        lines.append(
            f"{row['tag']:<30} {row['count']:>6} "
            f"{format_money(row['per_diem'], currency_symbol):>10} "
            f"{row['share']:>10.1%}"
        )

    return '\n'.join(lines)


def format_search_results(transactions: list[Transaction], on: date, currency_symbol: str = '€') -> str:
    """Format search matches with their lifetime and progress on ``on``."""
    if not transactions:
        return "No matches found."

    lines = [f"{'Item':<30} {'Price':>12} {'Diem':>10} {'Start':<10} {'End':<10} {'Progress':>9}  Tags"]
    lines.append("-" * 100)

    total_amount = Decimal(0)
    total_diem = Decimal(0)
    for transaction in transactions:
        result = evaluate(transaction, on)
        total_amount += transaction.amount
        total_diem += result.per_diem
        title = transaction.title if len(transaction.title) <= 30 else transaction.title[:29] + '…'
        lines.append(
            f"{title:<30} "
            f"{format_money(transaction.amount, currency_symbol):>12} "
            f"{format_money(result.per_diem, currency_symbol):>10} "
            f"{result.since.isoformat():<10} "
            f"{result.ends_on.isoformat():<10} "
            f"{result.progress_ratio:>9.1%}  "
            f"{' '.join('#' + t for t in transaction.tags)}"
        )

    lines.append("-" * 100)
    lines.append(
        f"{'Total':<30} {format_money(total_amount, currency_symbol):>12} "
        f"{format_money(total_diem, currency_symbol):>10}"
    )
    return '\n'.join(lines)


def transaction_row(transaction: Transaction, on: date) -> dict:
    """Serialize a transaction and its metrics on ``on`` for JSON output."""
    result = evaluate(transaction, on)
    return {
        'title': transaction.title,
        'amount': format_amount(transaction.amount),
        'since': transaction.since.isoformat(),
        'ends_on': result.ends_on.isoformat(),
        'lifetime': transaction.lifetime,
        'tags': list(transaction.tags),
        'per_diem': str(result.per_diem),
        'progress': result.progress_ratio,
        'cost_to_date': str(result.cost_to_date),
    }
