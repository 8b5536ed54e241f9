"""Version information for costoflife."""

VERSION = '0.3.2'
