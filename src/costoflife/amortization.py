"""
Amortization engine - spreads a transaction's amount over its lifetime.

Month-end rule: month and year periods are always counted from ``since`` in a
single step with relativedelta, which clamps to the last valid day of the
target month. Jan 31 + 1 month is Feb 28 (Feb 29 in leap years), and the k-th
period of a monthly transaction ends on ``since + k months``, never on a date
derived from the previous (possibly clamped) boundary. Day and week periods
have a fixed length.
"""

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from .domain import CENTS, AmortizationResult, Duration, TimeUnit, Transaction
from .errors import ArithmeticOverflow


def _period_offset(duration: Duration, times: int):
    """Offset covering ``times`` consecutive periods of ``duration``."""
    units = duration.count * times
    if duration.unit == TimeUnit.YEAR:
        return relativedelta(years=units)
    if duration.unit == TimeUnit.MONTH:
        return relativedelta(months=units)
    if duration.unit == TimeUnit.WEEK:
        return timedelta(weeks=units)
    return timedelta(days=units)


def advance(since: date, duration: Duration, times: int = 1) -> date:
    """
    Advance a date by ``times`` periods of ``duration``.

    Args:
        since: Start date
        duration: Period length
        times: Number of periods (default: 1)

    Returns:
        The first day after the last period

    Raises:
        ArithmeticOverflow: If the result is past the last representable date
    """
    try:
        return since + _period_offset(duration, times)
    except (OverflowError, ValueError) as e:
        raise ArithmeticOverflow(
            f"cannot advance {since} by {times} x {duration}: {e}"
        )


def period_boundaries(transaction: Transaction) -> list[date]:
    """Start of each period plus the exclusive end (repeat + 1 dates)."""
    return [
        advance(transaction.since, transaction.duration, k)
        for k in range(transaction.repeat + 1)
    ]


def end_date(transaction: Transaction) -> date:
    """First day after the transaction's lifetime (exclusive end)."""
    return advance(transaction.since, transaction.duration, transaction.repeat)


def ends_on(transaction: Transaction) -> date:
    """Last day covered by the transaction (inclusive end)."""
    return end_date(transaction) - timedelta(days=1)


def total_span_days(transaction: Transaction) -> int:
    """Number of days covered by the transaction, using real calendar lengths."""
    return (end_date(transaction) - transaction.since).days


def is_active_on(transaction: Transaction, on: date) -> bool:
    """Check if ``on`` falls inside the transaction's lifetime."""
    return transaction.since <= on <= ends_on(transaction)


def per_diem_raw(transaction: Transaction) -> Decimal:
    """Unrounded cost of one day of the transaction's lifetime."""
    return transaction.amount / Decimal(total_span_days(transaction))


def _elapsed_days(since: date, last_day: date, span: int, on: date) -> int:
    # The last covered day completes the lifetime; nothing is consumed on since
    if on >= last_day:
        return span
    if on <= since:
        return 0
    return (on - since).days


def evaluate(transaction: Transaction, reference_date: Optional[date] = None) -> AmortizationResult:
    """
    Compute amortization metrics for a transaction on a given day.

    Args:
        transaction: Transaction to evaluate
        reference_date: Day to evaluate on (default: today)

    Returns:
        AmortizationResult; progress is 0.0 up to ``since`` and exactly 1.0
        from the inclusive end date on

    Raises:
        ArithmeticOverflow: If the lifetime ends past the last representable date
    """
    if reference_date is None:
        reference_date = date.today()

    since = transaction.since
    end = end_date(transaction)
    span = (end - since).days
    last_day = end - timedelta(days=1)

    elapsed = _elapsed_days(since, last_day, span, reference_date)
    progress = elapsed / span if span else 0.0

    amount = transaction.amount
    raw_per_diem = amount / Decimal(span)
    cost_to_date = (amount * elapsed / Decimal(span)).quantize(CENTS, rounding=ROUND_HALF_UP)

    return AmortizationResult(
        reference_date=reference_date,
        since=since,
        end_date=end,
        ends_on=last_day,
        total_span_days=span,
        elapsed_days=elapsed,
        progress_ratio=progress,
        cost_to_date=cost_to_date,
        remaining_cost=amount - cost_to_date,
        per_diem=raw_per_diem.quantize(CENTS, rounding=ROUND_HALF_UP),
        per_diem_raw=raw_per_diem,
    )
