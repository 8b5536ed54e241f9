"""
ANSI colors for terminal output.

Colors are disabled when stdout is not a terminal or NO_COLOR is set.
"""

import os
import sys


def _supports_color(stream=None) -> bool:
    """Check if the stream is a color-capable terminal."""
    stream = stream or sys.stdout
    if os.environ.get('NO_COLOR'):
        return False
    return hasattr(stream, 'isatty') and stream.isatty()


class C:
    """Color codes, blank strings when colors are off."""
    _enabled = _supports_color()

    RESET = '\033[0m' if _enabled else ''
    BOLD = '\033[1m' if _enabled else ''
    DIM = '\033[2m' if _enabled else ''
    RED = '\033[31m' if _enabled else ''
    GREEN = '\033[32m' if _enabled else ''
    YELLOW = '\033[33m' if _enabled else ''
    CYAN = '\033[36m' if _enabled else ''
