# backend/networth/services/constants.py
"""
Centralized constants for the Net Worth Tracker services.

Usage:
    from networth.services.constants import ZERO, HUNDRED, THREE_MONTHS
"""

from decimal import Decimal

from networth.utils.date_utils import Lookback


# =============================================================================
# NUMERIC CONSTANTS
# =============================================================================

ZERO: Decimal = Decimal("0")
HUNDRED: Decimal = Decimal("100")

# Percentages are reported with 4 decimal places (e.g. 33.3333)
PERCENTAGE_PRECISION: Decimal = Decimal("0.0001")

# Portfolio "today" change when every unit of value is new money
ALL_NEW_MONEY_PERCENTAGE: Decimal = Decimal("100")


# =============================================================================
# LOOKBACK WINDOWS
# =============================================================================

# One month: calendar month subtraction (31 Mar -> 28/29 Feb)
ONE_MONTH: Lookback = Lookback(months=1)

# Three months: fixed 90 days
THREE_MONTHS: Lookback = Lookback(days=90)

# One year: twelve calendar months
ONE_YEAR: Lookback = Lookback(months=12)


# =============================================================================
# PERIOD LABELS
# =============================================================================

LABEL_LAST_UPDATE = "Since last update"
LABEL_ONE_MONTH = "Past month"
LABEL_THREE_MONTHS = "Past 3 months"
LABEL_ONE_YEAR = "Past year"
LABEL_ALL_TIME = "All time"
LABEL_CUSTOM_PERIOD = "Recent period"
