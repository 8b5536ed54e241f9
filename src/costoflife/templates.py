"""
Starter template strings for costoflife init command.
"""

STARTER_SETTINGS = '''# costoflife settings (created {year})

# Where recorded expenses are stored.
# Relative paths start from the folder that contains config/
ledger_file: data/ledger.yaml

# Symbol shown next to amounts in reports (input amounts always use €)
currency_symbol: "€"

# Log verbosity: DEBUG, INFO, WARNING, ERROR
# Can be overridden with -v / -vv or the COSTOFLIFE_LOG_LEVEL variable
log_level: WARNING
'''

STARTER_GITIGNORE = '''# costoflife - Ignore personal data
data/
'''

EXPRESSION_HELP = '''Expense expressions mix these tokens in any order:

  10€  12.50€        amount (required)
  1d 2w 3m 1y        lifetime of one period (default: 1d)
  1m12x              ... repeated 12 times
  010121             start date as DDMMYY (default: today)
  #food .food        tags
  anything else      title (required)

Examples:
  costoflife add Netflix 120€ 1m12x 010121 #tv
  costoflife add Car 20000€ 5y .transport
'''
