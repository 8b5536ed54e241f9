"""
costoflife 'init' command - Initialize a new expense directory.
"""

import os

from ..cli_utils import init_config
from ..colors import C
from ..templates import EXPRESSION_HELP


def cmd_init(args):
    """Handle the 'init' subcommand."""
    # Reuse ./config when the user didn't name a directory
    if args.dir == 'costoflife' and os.path.isdir('./config'):
        target_dir = os.path.abspath('.')
        print(f"{C.CYAN}Found existing config/ directory{C.RESET}")
        print("  Initializing current directory in place")
        print()
    else:
        target_dir = os.path.abspath(args.dir)

    rel_target = os.path.relpath(target_dir)
    if rel_target == '.':
        rel_target = './'

    print(f"Initializing expense directory: {C.BOLD}{rel_target}{C.RESET}")
    print()

    created, skipped = init_config(target_dir)

    file_descriptions = {
        'config/settings.yaml': 'ledger location and display options',
        '.gitignore': 'keeps data/ out of version control',
    }

    all_files = sorted([(f, True) for f in created] + [(f, False) for f in skipped])
    for f, was_created in all_files:
        desc = file_descriptions.get(f, '')
        desc_str = f" {C.DIM}({desc}){C.RESET}" if desc else ""
        if was_created:
            print(f"  {C.GREEN}✓{C.RESET} {f}{desc_str}")
        else:
            print(f"  {C.YELLOW}→{C.RESET} {C.DIM}{f} (exists){C.RESET}")

    print()
    print(f"{C.BOLD}Next steps:{C.RESET}")
    print()
    for line in EXPRESSION_HELP.splitlines():
        print(f"  {line}" if line else "")
