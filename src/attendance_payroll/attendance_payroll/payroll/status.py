from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ..core.enums import PaymentStatus
from ..core.exceptions import PaymentTransitionError
from .model import PaymentRecord

ALLOWED_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PARTIAL, PaymentStatus.PAID, PaymentStatus.OVERDUE}),
    PaymentStatus.PARTIAL: frozenset({PaymentStatus.PARTIAL, PaymentStatus.PAID}),
    PaymentStatus.OVERDUE: frozenset({PaymentStatus.PARTIAL, PaymentStatus.PAID}),
    PaymentStatus.PAID: frozenset(),
}


def transition(record: PaymentRecord, new_status: PaymentStatus, *, now: datetime, **changes) -> PaymentRecord:
    if new_status not in ALLOWED_TRANSITIONS[record.payment_status]:
        raise PaymentTransitionError(
            f"payment for {record.worker_id} cannot move from {record.payment_status.value} to {new_status.value}"
        )
    return replace(record, payment_status=new_status, updated_at=now, **changes)
