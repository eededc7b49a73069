SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Fixed values so tests do not depend on the environment
STANDARD_HOURS = 8
WORKDAY_START = "09:00"
WORKDAY_END = "17:00"
LATE_GRACE_MINUTES = 15
OVERTIME_MULTIPLIER = 1.5

PF_ENABLED = False
ESI_ENABLED = False
PROFESSIONAL_TAX_ENABLED = False
INCOME_TAX_ENABLED = False

PAYMENT_DUE_DAYS = 7
