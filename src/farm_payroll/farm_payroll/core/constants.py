"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_FARM_ID = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500

OVERTIME_HOURS_PER_DAY = 8

WORKER_CACHE_TTL_SECONDS = 60
WORKER_CACHE_MAX_ENTRIES = 100

# Largest value the DECIMAL(12, 2) money columns hold.
MAX_AMOUNT = Decimal("9999999999.99")
MAX_OVERTIME_HOURS = Decimal("24")
