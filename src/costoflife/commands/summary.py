"""
costoflife 'summary' and 'tags' commands - Show the daily cost of life.
"""

import json
import sys

from ..cli_utils import load_config_or_exit, print_config_warnings, resolve_target_date
from ..colors import C
from ..errors import CostOfLifeError
from ..finance_calcs import (
    calculate_cost_of_life,
    format_summary,
    format_tag_summary,
    summarize_tags,
    summarize_transactions,
)
from ..ledger import load_transactions


def _load_or_exit(config):
    try:
        return load_transactions(config['ledger_path'])
    except ValueError as e:
        print(f"{C.RED}Error loading ledger:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)


def cmd_summary(args):
    """Handle the 'summary' subcommand - list active expenses and their progress."""
    config = load_config_or_exit(args)
    on = resolve_target_date(args)
    transactions = _load_or_exit(config)

    try:
        rows = summarize_transactions(transactions, on)
        total = calculate_cost_of_life(transactions, on)
    except CostOfLifeError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == 'json':
        output = {
            'on': on.isoformat(),
            'cost_of_life': str(total),
            'transactions': [
                {
                    **row,
                    'amount': str(row['amount']),
                    'per_diem': str(row['per_diem']),
                    'cost_to_date': str(row['cost_to_date']),
                    'since': row['since'].isoformat(),
                    'ends_on': row['ends_on'].isoformat(),
                }
                for row in rows
            ],
        }
        print(json.dumps(output, indent=2))
    else:
        print(format_summary(rows, on, total, config['currency_symbol']))

    print_config_warnings(config)


def cmd_tags(args):
    """Handle the 'tags' subcommand - break the daily cost of life down by tag."""
    config = load_config_or_exit(args)
    on = resolve_target_date(args)
    transactions = _load_or_exit(config)

    try:
        rows = summarize_tags(transactions, on)
    except CostOfLifeError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == 'json':
        output = {
            'on': on.isoformat(),
            'tags': [{**row, 'per_diem': str(row['per_diem'])} for row in rows],
        }
        print(json.dumps(output, indent=2))
    else:
        print(format_tag_summary(rows, on, config['currency_symbol']))

    print_config_warnings(config)
