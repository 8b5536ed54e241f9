"""
costoflife 'search' command - Find recorded expenses by title words or tags.
"""

import json
import sys

from ..cli_utils import load_config_or_exit, print_config_warnings, resolve_target_date
from ..colors import C
from ..errors import CostOfLifeError
from ..finance_calcs import format_search_results, search_transactions, transaction_row
from ..ledger import load_transactions


def cmd_search(args):
    """Handle the 'search' subcommand."""
    pattern = ' '.join(args.pattern or [])
    config = load_config_or_exit(args)
    on = resolve_target_date(args)

    try:
        transactions = load_transactions(config['ledger_path'])
    except ValueError as e:
        print(f"{C.RED}Error loading ledger:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    matches = search_transactions(transactions, pattern)

    try:
        if args.format == 'json':
            output = {
                'pattern': pattern,
                'on': on.isoformat(),
                'matches': [transaction_row(t, on) for t in matches],
            }
            print(json.dumps(output, indent=2))
        else:
            print(format_search_results(matches, on, config['currency_symbol']))
    except CostOfLifeError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    print_config_warnings(config)
