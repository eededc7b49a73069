from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily classification stored on an attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half_day"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"


class EntryMethod(str, Enum):
    QR_SCAN = "qr_scan"
    MANUAL = "manual"
    BIOMETRIC = "biometric"
    MOBILE_APP = "mobile_app"
    IMPORTED = "imported"


class ScanAction(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class HalfDayType(str, Enum):
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"


class WorkerStatus(str, Enum):
    """Worker lifecycle state; only ACTIVE workers may scan."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"
    ON_LEAVE = "on_leave"


class PeriodType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class WageType(str, Enum):
    DAILY = "daily"
    HOURLY = "hourly"
    FIXED = "fixed"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CASH = "cash"
    CHEQUE = "cheque"
    MIXED = "mixed"
