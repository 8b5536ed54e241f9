"""
Transaction parser - turns a free-form line into a Transaction.

A line is split into whitespace-separated tokens. Each token is tried against
an ordered list of matchers; the first one that matches decides its kind:

    10€  10.5€  10.50€       amount
    1d  2w  3m  1y  1m12x    duration, with optional repeat count
    010121                   start date (DDMMYY, years 2000-2099)
    #food  .food             tag
    anything else            title text

Amount, duration and date are accepted once per line. A later token of the
same kind is kept as title text, so "10€ 20€ lunch" costs 10€ and is titled
"20€ lunch".
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from .domain import CENTURY, Duration, Transaction, TimeUnit, normalize_tags
from .errors import InvalidAmountPrecision, InvalidDate, MissingAmount, MissingTitle
from .logging_setup import get_logger

logger = get_logger('costoflife.parser')

# The only accepted currency suffix
CURRENCY_SYMBOL = '€'


class TokenKind(Enum):
    """What a token was recognized as."""
    AMOUNT = 'amount'
    DURATION = 'duration'
    DATE = 'date'
    TAG = 'tag'
    UNMATCHED = 'unmatched'


# Kinds accepted at most once per line
SINGLE_USE_KINDS = frozenset({TokenKind.AMOUNT, TokenKind.DURATION, TokenKind.DATE})


@dataclass(frozen=True)
class ClassifiedToken:
    """
    A token with its recognized kind.

    Attributes:
        kind: Kind of the token
        text: Original token text
        value: Parsed value (Decimal, (Duration, repeat), date, tag name) or None
    """
    kind: TokenKind
    text: str
    value: Any = None


@dataclass(frozen=True)
class Matcher:
    """A token grammar: a full-token pattern and a converter for its value."""
    kind: TokenKind
    pattern: re.Pattern
    convert: Callable[[str, re.Match], Any]


# =============================================================================
# VALUE CONVERTERS
# =============================================================================

def _to_amount(token: str, match: re.Match) -> Decimal:
    fraction = match.group(2)
    if fraction is not None and len(fraction) > 2:
        raise InvalidAmountPrecision(
            f"invalid amount token '{token}': at most two decimal digits are allowed",
            token=token,
        )
    return Decimal(token[:-len(CURRENCY_SYMBOL)])


def _to_lifetime(token: str, match: re.Match) -> tuple[Duration, int]:
    duration = Duration(unit=TimeUnit(match.group(2)), count=int(match.group(1)))
    # 1m12x and 1mx12 both repeat the period 12 times
    repeat_text = match.group(3) or match.group(4)
    repeat = int(repeat_text) if repeat_text else 1
    return duration, repeat


def _to_date(token: str, match: re.Match) -> date:
    day, month, year = (int(g) for g in match.groups())
    try:
        return date(CENTURY + year, month, day)
    except ValueError as e:
        raise InvalidDate(f"invalid date token '{token}': {e}", token=token)


def _to_tag(token: str, match: re.Match) -> str:
    return match.group(1).lower()


# =============================================================================
# GRAMMAR
# =============================================================================

MATCHERS = (
    Matcher(
        TokenKind.AMOUNT,
        re.compile(r'^([1-9][0-9]*)(?:\.([0-9]+))?' + re.escape(CURRENCY_SYMBOL) + r'$'),
        _to_amount,
    ),
    Matcher(
        TokenKind.DURATION,
        re.compile(r'^([1-9][0-9]*)([dwmy])(?:([1-9][0-9]*)x|x([1-9][0-9]*))?$'),
        _to_lifetime,
    ),
    Matcher(
        TokenKind.DATE,
        re.compile(r'^(0[1-9]|[12][0-9]|3[01])(0[1-9]|1[0-2])([0-9]{2})$'),
        _to_date,
    ),
    Matcher(
        TokenKind.TAG,
        re.compile(r'^[#.]([A-Za-z0-9_-]+)$'),
        _to_tag,
    ),
)


@dataclass
class ClassificationState:
    """Kinds already accepted while walking the tokens of one line."""
    seen: set = field(default_factory=set)

    def accepts(self, kind: TokenKind) -> bool:
        return kind not in SINGLE_USE_KINDS or kind not in self.seen


# =============================================================================
# PARSING
# =============================================================================

def tokenize(line: str) -> list[str]:
    """Split a line on runs of whitespace, keeping token order."""
    return (line or '').split()


def _classify_one(token: str, state: ClassificationState) -> ClassifiedToken:
    for matcher in MATCHERS:
        match = matcher.pattern.match(token)
        if match is None:
            continue
        if not state.accepts(matcher.kind):
            # Duplicates degrade to title text without being converted
            logger.debug("token %r is a repeated %s, kept as text", token, matcher.kind.value)
            return ClassifiedToken(TokenKind.UNMATCHED, token)
        value = matcher.convert(token, match)
        state.seen.add(matcher.kind)
        return ClassifiedToken(matcher.kind, token, value)
    return ClassifiedToken(TokenKind.UNMATCHED, token)


def classify_tokens(tokens: Iterable[str]) -> list[ClassifiedToken]:
    """
    Classify tokens in order.

    Args:
        tokens: Tokens as returned by tokenize()

    Returns:
        One ClassifiedToken per input token, in the same order

    Raises:
        InvalidAmountPrecision: If the first amount token has more than two decimals
        InvalidDate: If the first date token is not a real calendar day
    """
    state = ClassificationState()
    classified = [_classify_one(token, state) for token in tokens]
    logger.debug("classified %s", [(c.text, c.kind.value) for c in classified])
    return classified


def classify(token: str) -> ClassifiedToken:
    """Classify a single token on its own."""
    return _classify_one(token, ClassificationState())


def build(classified: Iterable[ClassifiedToken], today: Optional[date] = None) -> Transaction:
    """
    Assemble classified tokens into a Transaction.

    Args:
        classified: Tokens as returned by classify_tokens()
        today: Start date used when no date token is present (default: date.today())

    Returns:
        Transaction

    Raises:
        MissingAmount: If there is no amount token
        MissingTitle: If no token was left over for the title
    """
    amount = None
    lifetime = None
    since = None
    tags = []
    title_words = []

    for token in classified:
        if token.kind == TokenKind.AMOUNT and amount is None:
            amount = token.value
        elif token.kind == TokenKind.DURATION and lifetime is None:
            lifetime = token.value
        elif token.kind == TokenKind.DATE and since is None:
            since = token.value
        elif token.kind == TokenKind.TAG:
            tags.append(token.value)
        else:
            title_words.append(token.text)

    if amount is None:
        raise MissingAmount()
    if not title_words:
        raise MissingTitle()

    duration, repeat = lifetime if lifetime else (Duration(), 1)

    return Transaction(
        title=' '.join(title_words),
        amount=amount,
        since=since or today or date.today(),
        duration=duration,
        repeat=repeat,
        tags=normalize_tags(tags),
    )


def parse(line: str, today: Optional[date] = None) -> Transaction:
    """
    Parse a transaction line, e.g. ``"Netflix 120€ 1m12x 010121 #tv"``.

    Args:
        line: Free-form transaction text
        today: Start date used when the line has no date token

    Returns:
        Transaction

    Raises:
        ValidationError: MissingAmount, MissingTitle or InvalidAmountPrecision
        InvalidDate: If the date token is not a real calendar day
    """
    transaction = build(classify_tokens(tokenize(line)), today=today)
    logger.debug("parsed %r into %r", line, transaction)
    return transaction


# Formats accepted for dates typed on the command line
DATE_FORMATS = ['%d%m%y', '%d.%m.%y', '%d/%m/%y', '%d/%m/%Y', '%d.%m.%Y', '%Y-%m-%d']


def date_from_str(text: str) -> Optional[date]:
    """
    Parse a date in one of DATE_FORMATS.

    Returns:
        The date, or None if no format matches
    """
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text.strip(), fmt).date()
        except ValueError:
            continue
    return None
