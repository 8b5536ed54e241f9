"""
CLI utility functions for costoflife commands.

This module contains shared utilities used by command modules,
keeping them separate from the main CLI argument parsing.
"""

import datetime
import os
import sys

from .colors import C
from .config_loader import load_config
from .logging_setup import configure_logging
from .parser import date_from_str
from .templates import STARTER_GITIGNORE, STARTER_SETTINGS


def find_config_dir():
    """Find the config directory, checking environment and both layouts.

    Resolution order:
    1. COSTOFLIFE_CONFIG environment variable (if set and exists)
    2. ./config (config in current directory)
    3. ./costoflife/config (config in costoflife subdirectory)

    Returns None if no config directory is found.
    """
    env_config = os.environ.get('COSTOFLIFE_CONFIG')
    if env_config:
        env_path = os.path.abspath(env_config)
        if os.path.isdir(env_path):
            return env_path

    local_layout = os.path.abspath('config')
    if os.path.isdir(local_layout):
        return local_layout

    nested_layout = os.path.abspath(os.path.join('costoflife', 'config'))
    if os.path.isdir(nested_layout):
        return nested_layout

    return None


def resolve_config_dir(args, required=True):
    """Resolve config directory from args or auto-detect.

    Args:
        args: Parsed argparse namespace with optional 'config_dir' attribute
        required: If True, exit with error when no config found

    Returns:
        Absolute path to config directory, or None if not found and not required
    """
    if getattr(args, 'config_dir', None):
        config_dir = os.path.abspath(args.config_dir)
    else:
        config_dir = find_config_dir()

    if required and (config_dir is None or not os.path.isdir(config_dir)):
        print(f"{C.RED}Error:{C.RESET} Config directory not found.", file=sys.stderr)
        print("Looked for: ./config and ./costoflife/config", file=sys.stderr)
        print(f"\nRun '{C.GREEN}costoflife init{C.RESET}' to create one.", file=sys.stderr)
        sys.exit(1)

    return config_dir


def load_config_or_exit(args):
    """Resolve and load the configuration, exiting on configuration errors."""
    config_dir = resolve_config_dir(args, required=True)

    try:
        config = load_config(config_dir, args.settings)
    except ValueError as e:
        print(f"{C.RED}Error loading configuration:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    # No-op when -v already configured logging
    configure_logging(os.environ.get('COSTOFLIFE_LOG_LEVEL') or config['log_level'])

    errors = [w for w in config['_warnings'] if w['type'] == 'error']
    if errors:
        print(f"{C.RED}Configuration errors:{C.RESET}", file=sys.stderr)
        for error in errors:
            print(f"  • {error['message']}", file=sys.stderr)
        sys.exit(1)

    return config


def print_config_warnings(config):
    """Print configuration warnings to stderr (keeps JSON output clean)."""
    warnings = [w for w in config.get('_warnings', []) if w['type'] == 'warning']
    if warnings:
        print(file=sys.stderr)
        print(f"{C.YELLOW}Configuration warnings:{C.RESET}", file=sys.stderr)
        for warning in warnings:
            print(f"  • {warning['message']}", file=sys.stderr)


def resolve_target_date(args):
    """Return the --on date, or today. Exits with an error on an unreadable date."""
    on = getattr(args, 'on', None)
    if not on:
        return datetime.date.today()

    target = date_from_str(on)
    if target is None:
        print(f"{C.RED}Invalid date:{C.RESET} {on}", file=sys.stderr)
        print("Use DDMMYY, DD/MM/YYYY or YYYY-MM-DD (e.g., 010121 or 2021-01-01)", file=sys.stderr)
        sys.exit(1)
    return target


def init_config(target_dir):
    """Initialize a new config directory with starter files."""
    config_dir = os.path.join(target_dir, 'config')
    data_dir = os.path.join(target_dir, 'data')

    os.makedirs(config_dir, exist_ok=True)
    os.makedirs(data_dir, exist_ok=True)

    current_year = datetime.datetime.now().year
    files_created = []
    files_skipped = []

    settings_path = os.path.join(config_dir, 'settings.yaml')
    if not os.path.exists(settings_path):
        with open(settings_path, 'w', encoding='utf-8') as f:
            f.write(STARTER_SETTINGS.format(year=current_year))
        files_created.append('config/settings.yaml')
    else:
        files_skipped.append('config/settings.yaml')

    # Keep personal data out of version control
    gitignore_path = os.path.join(target_dir, '.gitignore')
    if not os.path.exists(gitignore_path):
        with open(gitignore_path, 'w', encoding='utf-8') as f:
            f.write(STARTER_GITIGNORE)
        files_created.append('.gitignore')
    else:
        files_skipped.append('.gitignore')

    return files_created, files_skipped
