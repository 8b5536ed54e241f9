"""
costoflife - the cost of life calculator.

Spreads the cost of an expense over its lifetime and tells how much of it
each day of your life costs.

    >>> from datetime import date
    >>> from costoflife import parse, evaluate
    >>> tx = parse("Netflix 120€ 1m12x 010121 #tv")
    >>> str(evaluate(tx, date(2021, 12, 31)).cost_to_date)
    '120.00'
"""

from ._version import VERSION
from .amortization import advance, end_date, ends_on, evaluate, is_active_on, total_span_days
from .domain import AmortizationResult, Duration, TimeUnit, Transaction
from .errors import (
    ArithmeticOverflow,
    CostOfLifeError,
    InvalidAmountPrecision,
    InvalidDate,
    MissingAmount,
    MissingTitle,
    ValidationError,
)
from .fingerprint import fingerprint
from .parser import build, classify, classify_tokens, parse, tokenize

__version__ = VERSION

__all__ = [
    'AmortizationResult',
    'ArithmeticOverflow',
    'CostOfLifeError',
    'Duration',
    'InvalidAmountPrecision',
    'InvalidDate',
    'MissingAmount',
    'MissingTitle',
    'TimeUnit',
    'Transaction',
    'ValidationError',
    'advance',
    'build',
    'classify',
    'classify_tokens',
    'end_date',
    'ends_on',
    'evaluate',
    'fingerprint',
    'is_active_on',
    'parse',
    'tokenize',
    'total_span_days',
]
