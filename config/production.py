import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STANDARD_HOURS = float(os.getenv("STANDARD_HOURS", "8"))
WORKDAY_START = os.getenv("WORKDAY_START", "09:00")
WORKDAY_END = os.getenv("WORKDAY_END", "17:00")
LATE_GRACE_MINUTES = int(os.getenv("LATE_GRACE_MINUTES", "15"))
OVERTIME_MULTIPLIER = float(os.getenv("OVERTIME_MULTIPLIER", "1.5"))

PF_ENABLED = bool(int(os.getenv("PF_ENABLED", "1")))
PF_EMPLOYEE_RATE = float(os.getenv("PF_EMPLOYEE_RATE", "12"))
ESI_ENABLED = bool(int(os.getenv("ESI_ENABLED", "1")))
ESI_EMPLOYEE_RATE = float(os.getenv("ESI_EMPLOYEE_RATE", "0.75"))
PROFESSIONAL_TAX_ENABLED = bool(int(os.getenv("PROFESSIONAL_TAX_ENABLED", "1")))
PROFESSIONAL_TAX_AMOUNT = float(os.getenv("PROFESSIONAL_TAX_AMOUNT", "200"))
INCOME_TAX_ENABLED = bool(int(os.getenv("INCOME_TAX_ENABLED", "0")))
INCOME_TAX_RATE = float(os.getenv("INCOME_TAX_RATE", "0"))

PAYMENT_DUE_DAYS = int(os.getenv("PAYMENT_DUE_DAYS", "7"))
