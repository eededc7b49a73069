"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_STANDARD_HOURS = 8.0
DEFAULT_OVERTIME_MULTIPLIER = 1.5
DEFAULT_LATE_GRACE_MINUTES = 15
DEFAULT_WORKDAY_START = "09:00"
DEFAULT_WORKDAY_END = "17:00"

DEFAULT_PF_EMPLOYEE_RATE = 12.0
DEFAULT_ESI_EMPLOYEE_RATE = 0.75
DEFAULT_PROFESSIONAL_TAX_AMOUNT = 200.0
DEFAULT_INCOME_TAX_RATE = 0.0
DEFAULT_PAYMENT_DUE_DAYS = 7

QR_PAYLOAD_VERSION = "1.0"

LEAVE_TYPES = ("sick", "casual", "paid", "unpaid", "maternity", "paternity", "emergency")
