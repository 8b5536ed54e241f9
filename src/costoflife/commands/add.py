"""
costoflife 'add' command - Record a new expense.
"""

import json
import sys

from ..amortization import evaluate
from ..cli_utils import load_config_or_exit, print_config_warnings
from ..colors import C
from ..errors import CostOfLifeError
from ..finance_calcs import format_money, transaction_row
from ..ledger import add_transaction, load_transactions, save_transactions
from ..logging_setup import get_logger
from ..parser import parse
from ..templates import EXPRESSION_HELP

logger = get_logger('costoflife.commands.add')


def _confirm(question, default=True):
    """Ask a yes/no question on the terminal."""
    hint = '[Y/n]' if default else '[y/N]'
    try:
        answer = input(f"{question} {hint} ").strip().lower()
    except EOFError:
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')


def cmd_add(args):
    """Handle the 'add' subcommand - parse an expense expression and store it."""
    expression = ' '.join(args.expression or [])
    if not expression.strip():
        print("Tell me what to add, e.g.: costoflife add Car 20000€ .transport 5y", file=sys.stderr)
        print(file=sys.stderr)
        print(EXPRESSION_HELP, file=sys.stderr)
        sys.exit(1)

    config = load_config_or_exit(args)
    currency = config['currency_symbol']

    try:
        transaction = parse(expression)
        result = evaluate(transaction, transaction.since)
    except CostOfLifeError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == 'text' and not args.yes:
        print(f"Title    : {C.BOLD}{transaction.title}{C.RESET}")
        print(f"Tags     : {', '.join(transaction.tags) or '-'}")
        print(f"Amount   : {format_money(transaction.amount, currency)}")
        print(f"Lifetime : {transaction.lifetime} ({result.total_span_days} days)")
        print(f"From - To: {result.since.isoformat()} - {result.ends_on.isoformat()}")
        print(f"Per Diem : {format_money(result.per_diem, currency)}")
        print()
        if not _confirm("Do you want to add it?"):
            print("ok, another time")
            return

    try:
        transactions = load_transactions(config['ledger_path'])
    except ValueError as e:
        print(f"{C.RED}Error loading ledger:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    transactions, added = add_transaction(transactions, transaction)
    if added:
        save_transactions(config['ledger_path'], transactions)
        logger.info("recorded %r in %s", transaction.title, config['ledger_path'])

    if args.format == 'json':
        output = transaction_row(transaction, transaction.since)
        output['added'] = added
        print(json.dumps(output, indent=2))
    elif added:
        print(f"{C.GREEN}done!{C.RESET}")
    else:
        print(f"{C.YELLOW}Already recorded:{C.RESET} {transaction.title}")

    print_config_warnings(config)
