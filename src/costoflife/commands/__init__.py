"""
Command handlers for the costoflife CLI.
"""

from .add import cmd_add
from .init import cmd_init
from .search import cmd_search
from .summary import cmd_summary, cmd_tags

__all__ = ['cmd_add', 'cmd_init', 'cmd_search', 'cmd_summary', 'cmd_tags']
