"""
Domain objects for costoflife expense amortization.

This module defines the core domain objects:
- Duration: A repeating period length (days, weeks, months, years)
- Transaction: An expense spread over one or more periods
- AmortizationResult: Metrics derived from a Transaction on a given day
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, Optional

from .errors import InvalidAmountPrecision, MissingTitle, ValidationError

# Monetary values are kept to the cent
CENTS = Decimal('0.01')

# Two-digit years in date tokens are read inside this century
CENTURY = 2000


class TimeUnit(Enum):
    """Unit of a transaction's repeating period."""
    DAY = 'd'
    WEEK = 'w'
    MONTH = 'm'
    YEAR = 'y'


@dataclass(frozen=True)
class Duration:
    """
    Length of one period of a transaction's lifetime.

    Attributes:
        unit: Period unit (day, week, month, year)
        count: Number of units in one period (e.g. 3 for "3m")
    """
    unit: TimeUnit = TimeUnit.DAY
    count: int = 1

    def __post_init__(self):
        """Validate duration data."""
        if isinstance(self.unit, str):
            try:
                object.__setattr__(self, 'unit', TimeUnit(self.unit.lower()))
            except ValueError:
                raise ValidationError(f"Invalid time unit: {self.unit!r}. Use one of d, w, m, y")
        if not isinstance(self.count, int) or isinstance(self.count, bool) or self.count < 1:
            raise ValidationError(f"Duration count must be a positive integer (got {self.count!r})")

    @classmethod
    def from_string(cls, text: str) -> 'Duration':
        """Build a Duration from its short form, e.g. ``'3m'``."""
        text = str(text).strip()
        if len(text) < 2 or not text[:-1].isdigit():
            raise ValidationError(f"Invalid duration: {text!r}. Use a form like 1d, 2w, 3m, 1y")
        return cls(unit=text[-1], count=int(text[:-1]))

    def __str__(self):
        return f"{self.count}{self.unit.value}"


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly two decimals, e.g. ``Decimal('10')`` -> ``'10.00'``."""
    return str(amount.quantize(CENTS))


def normalize_tag(tag: str) -> str:
    """Lowercase a tag and strip a leading ``#`` or ``.`` marker."""
    tag = str(tag).strip()
    if tag[:1] in ('#', '.'):
        tag = tag[1:]
    return tag.lower()


def normalize_tags(tags: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Lowercase, deduplicate and sort tags alphabetically."""
    normalized = {normalize_tag(t) for t in (tags or [])}
    normalized.discard('')
    return tuple(sorted(normalized))


@dataclass(frozen=True)
class Transaction:
    """
    An expense whose amount is spread over its lifetime.

    The lifetime starts on ``since`` and covers ``repeat`` consecutive periods
    of ``duration``. The last covered day is inclusive.

    Attributes:
        title: Free text description (e.g. "Netflix subscription")
        amount: Total amount, exact to the cent
        since: First day of the lifetime
        duration: Length of one period
        repeat: Number of consecutive periods
        tags: Lowercase tags, deduplicated and sorted
    """
    title: str
    amount: Decimal
    since: date = field(default_factory=date.today)
    duration: Duration = field(default_factory=Duration)
    repeat: int = 1
    tags: tuple[str, ...] = ()

    def __post_init__(self):
        """Validate and normalize transaction data."""
        title = ' '.join(str(self.title or '').split())
        if not title:
            raise MissingTitle("Transaction title cannot be empty")
        object.__setattr__(self, 'title', title)

        # Ensure amount is an exact decimal
        amount = self.amount
        if isinstance(amount, float):
            amount = str(amount)
        if not isinstance(amount, Decimal):
            try:
                amount = Decimal(str(amount).strip())
            except InvalidOperation:
                raise ValidationError(f"Invalid amount: {self.amount!r}", token=str(self.amount))
        if not amount.is_finite():
            raise ValidationError(f"Invalid amount: {self.amount!r}", token=str(self.amount))
        if amount < 0:
            raise InvalidAmountPrecision(f"Amount cannot be negative (got {amount})", token=str(self.amount))
        try:
            whole_cents = amount == amount.quantize(CENTS)
        except InvalidOperation:
            raise InvalidAmountPrecision(f"Amount {amount} is too large", token=str(self.amount))
        if not whole_cents:
            raise InvalidAmountPrecision(
                f"Amount {amount} has more than two decimal digits", token=str(self.amount)
            )
        object.__setattr__(self, 'amount', amount)

        # Ensure since is a date object
        if isinstance(self.since, datetime):
            object.__setattr__(self, 'since', self.since.date())
        elif isinstance(self.since, str):
            try:
                object.__setattr__(self, 'since', datetime.strptime(self.since, '%Y-%m-%d').date())
            except ValueError:
                raise ValidationError(f"Invalid date format: {self.since}. Use YYYY-MM-DD")
        elif not isinstance(self.since, date):
            raise ValidationError(f"Transaction since must be a date (got {self.since!r})")

        if isinstance(self.duration, str):
            object.__setattr__(self, 'duration', Duration.from_string(self.duration))
        elif not isinstance(self.duration, Duration):
            raise ValidationError(f"Transaction duration must be a Duration (got {self.duration!r})")

        if not isinstance(self.repeat, int) or isinstance(self.repeat, bool) or self.repeat < 1:
            raise ValidationError(f"Transaction repeat must be a positive integer (got {self.repeat!r})")

        if isinstance(self.tags, str):
            object.__setattr__(self, 'tags', normalize_tags([self.tags]))
        else:
            object.__setattr__(self, 'tags', normalize_tags(self.tags))

    @property
    def lifetime(self) -> str:
        """Short form of duration and repeat, e.g. ``'1m12x'``."""
        return f"{self.duration}{self.repeat}x"

    def has_tag(self, tag: str) -> bool:
        """Check if the transaction carries a tag (case-insensitive)."""
        return normalize_tag(tag) in self.tags

    def to_line(self) -> str:
        """
        Render the transaction as an input line.

        Amount, lifetime and date come first so that title words shaped like
        them stay text when the line is parsed again. The date is omitted
        when ``since`` falls outside the two-digit-year window.
        """
        parts = [f"{format_amount(self.amount)}€", self.lifetime]
        if CENTURY <= self.since.year < CENTURY + 100:
            parts.append(self.since.strftime('%d%m%y'))
        parts.append(self.title)
        parts.extend(f"#{t}" for t in self.tags)
        return ' '.join(parts)

    def __str__(self):
        return self.title


@dataclass(frozen=True)
class AmortizationResult:
    """
    Metrics of a transaction as of a reference date.

    Attributes:
        reference_date: Day the metrics were computed for
        since: First day of the lifetime
        end_date: First day after the lifetime (exclusive)
        ends_on: Last day of the lifetime (inclusive)
        total_span_days: Number of days in the lifetime
        elapsed_days: Days consumed before reference_date (all of them from ends_on on)
        progress_ratio: elapsed_days / total_span_days, in [0.0, 1.0]
        cost_to_date: Share of the amount consumed, rounded to cents
        remaining_cost: amount - cost_to_date
        per_diem: Cost of one day, rounded to cents
        per_diem_raw: Cost of one day, unrounded
    """
    reference_date: date
    since: date
    end_date: date
    ends_on: date
    total_span_days: int
    elapsed_days: int
    progress_ratio: float
    cost_to_date: Decimal
    remaining_cost: Decimal
    per_diem: Decimal
    per_diem_raw: Decimal

    @property
    def is_active(self) -> bool:
        """True if reference_date falls inside the lifetime."""
        return self.since <= self.reference_date <= self.ends_on
