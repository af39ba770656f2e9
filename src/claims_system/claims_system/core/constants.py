"""Constants and defaults.

Note: Keep business thresholds here to avoid magic numbers spread across code.
"""

from decimal import Decimal

MIN_HOURS_PER_MONTH = 1
MAX_HOURS_PER_MONTH = 200
STANDARD_WORKING_HOURS = 160  # 40 hours/week * 4 weeks

MIN_HOURLY_RATE = Decimal("0.01")
MAX_HOURLY_RATE = Decimal("1000")

AMOUNT_TOLERANCE = Decimal("0.01")
AUTO_APPROVE_THRESHOLD = Decimal("10000")
DOCUMENT_RECOMMENDED_ABOVE = Decimal("5000")

CURRENCY_SYMBOL = "R"
UNKNOWN_LECTURER_NAME = "Unknown"

MIN_REPORT_YEAR = 2000  # first year accepted by the annual report
MAX_REPORT_YEAR = 9999
