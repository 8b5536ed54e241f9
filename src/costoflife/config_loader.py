"""
Configuration loader for costoflife.

Loads settings.yaml from the config directory and fills in defaults.
"""

import os

import yaml

from .logging_setup import get_logger

logger = get_logger('costoflife.config_loader')

DEFAULT_SETTINGS = {
    'ledger_file': 'data/ledger.yaml',
    'currency_symbol': '€',
    'log_level': 'WARNING',
}

LOG_LEVELS = {'CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG'}


def load_config(config_dir: str, settings_file: str = 'settings.yaml') -> dict:
    """
    Load settings from the config directory.

    Args:
        config_dir: Path to config directory
        settings_file: Settings file name (relative to config_dir or absolute)

    Returns:
        Dict with every key of DEFAULT_SETTINGS, plus:
        - config_dir: Absolute config directory
        - ledger_path: Absolute path of the ledger file
        - _warnings: List of {'type', 'message'} dicts for unknown or invalid settings

    Raises:
        ValueError: If the settings file is not valid YAML or not a mapping
    """
    config_dir = os.path.abspath(config_dir)
    if os.path.isabs(settings_file):
        path = settings_file
    else:
        path = os.path.join(config_dir, settings_file)

    settings = {}
    if os.path.exists(path):
        with open(path, 'r', encoding='utf-8') as f:
            try:
                settings = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Malformed settings file {path}: {e}")
        if not isinstance(settings, dict):
            raise ValueError(f"Settings file {path} must contain a mapping of settings")
    else:
        logger.debug("settings file %s not found, using defaults", path)

    config = dict(DEFAULT_SETTINGS)
    config['_warnings'] = []

    for key, value in settings.items():
        if key not in DEFAULT_SETTINGS:
            config['_warnings'].append({
                'type': 'warning',
                'message': f"Unknown setting '{key}' in {os.path.basename(path)} (ignored)",
            })
            continue
        config[key] = value

    # Validate values
    if not isinstance(config['ledger_file'], str) or not config['ledger_file'].strip():
        config['_warnings'].append({
            'type': 'error',
            'message': "Setting 'ledger_file' must be a non-empty path",
        })
        config['ledger_file'] = DEFAULT_SETTINGS['ledger_file']

    config['currency_symbol'] = str(config['currency_symbol'])

    level = str(config['log_level']).upper()
    if level not in LOG_LEVELS:
        config['_warnings'].append({
            'type': 'warning',
            'message': f"Invalid log_level '{config['log_level']}', using {DEFAULT_SETTINGS['log_level']}",
        })
        level = DEFAULT_SETTINGS['log_level']
    config['log_level'] = level

    config['config_dir'] = config_dir
    config['ledger_path'] = resolve_ledger_path(config_dir, config['ledger_file'])
    return config


def resolve_ledger_path(config_dir: str, ledger_file: str) -> str:
    """Resolve the ledger path; relative paths start from the config directory's parent."""
    expanded = os.path.expandvars(os.path.expanduser(ledger_file))
    if os.path.isabs(expanded):
        return os.path.normpath(expanded)
    base_dir = os.path.dirname(os.path.abspath(config_dir))
    return os.path.normpath(os.path.join(base_dir, expanded))
