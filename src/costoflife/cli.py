"""
costoflife CLI - Command-line interface.

Usage:
    costoflife init                               # Create config/ and data/
    costoflife add Netflix 120€ 1m12x #tv         # Record an expense
    costoflife summary --on 2021-06-01            # Daily cost of life
    costoflife tags                               # Daily cost by tag
    costoflife search netflix                     # Find recorded expenses
"""

import argparse
import logging
import sys

from ._version import VERSION
from .logging_setup import configure_logging


def _add_common_arguments(parser, with_date=True):
    """Add options shared by the commands that read the ledger."""
    parser.add_argument(
        '--config',
        dest='config_dir',
        help='Path to config directory (default: ./config or $COSTOFLIFE_CONFIG)'
    )
    parser.add_argument(
        '--settings', '-s',
        default='settings.yaml',
        help='Settings file name (default: settings.yaml)'
    )
    parser.add_argument(
        '--format', '-f',
        choices=['text', 'json'],
        default='text',
        help='Output format: text (default), json'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase log verbosity (-v for info, -vv for debug)'
    )
    if with_date:
        parser.add_argument(
            '--on', '-o',
            metavar='DATE',
            help='Calculate for this date instead of today (DDMMYY, DD/MM/YYYY or YYYY-MM-DD)'
        )


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='costoflife',
        description='Keep track of the cost of your daily life.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Run 'costoflife init' to get started."
    )

    subparsers = parser.add_subparsers(dest='command', title='commands', metavar='<command>')

    # init subcommand
    init_parser = subparsers.add_parser(
        'init',
        help='Set up a new expense folder with config files (run once to get started)'
    )
    init_parser.add_argument(
        'dir',
        nargs='?',
        default='costoflife',
        help='Directory to initialize (default: ./costoflife)'
    )

    # add subcommand
    add_parser = subparsers.add_parser(
        'add',
        help='Record a new expense, e.g.: costoflife add Car 20000€ 5y .transport',
        description='Parse an expense expression and store it in the ledger.'
    )
    add_parser.add_argument(
        'expression',
        nargs='*',
        help='Expense expression (amount, lifetime, DDMMYY date, #tags and title)'
    )
    add_parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Add without asking for confirmation'
    )
    _add_common_arguments(add_parser, with_date=False)

    # summary subcommand
    summary_parser = subparsers.add_parser(
        'summary',
        help='Show active expenses, their per diem and progress'
    )
    _add_common_arguments(summary_parser)

    # tags subcommand
    tags_parser = subparsers.add_parser(
        'tags',
        help='Show the daily cost of life broken down by tag'
    )
    _add_common_arguments(tags_parser)

    # search subcommand
    search_parser = subparsers.add_parser(
        'search',
        help='Find expenses by title words or tags'
    )
    search_parser.add_argument(
        'pattern',
        nargs='+',
        help='Words to match against titles and tags'
    )
    _add_common_arguments(search_parser)

    # version subcommand
    subparsers.add_parser(
        'version',
        help='Show version information'
    )

    return parser


def main(argv=None):
    """Main entry point for costoflife CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    # Without -v, logging is configured from settings once they are loaded
    verbose = getattr(args, 'verbose', 0)
    if verbose >= 2:
        configure_logging(logging.DEBUG)
    elif verbose == 1:
        configure_logging(logging.INFO)

    # Dispatch to command handler
    if args.command == 'init':
        from .commands import cmd_init
        cmd_init(args)
    elif args.command == 'add':
        from .commands import cmd_add
        cmd_add(args)
    elif args.command == 'summary':
        from .commands import cmd_summary
        cmd_summary(args)
    elif args.command == 'tags':
        from .commands import cmd_tags
        cmd_tags(args)
    elif args.command == 'search':
        from .commands import cmd_search
        cmd_search(args)
    elif args.command == 'version':
        print(f"costoflife {VERSION}")


if __name__ == '__main__':
    main()
