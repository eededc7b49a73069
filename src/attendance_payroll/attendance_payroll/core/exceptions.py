class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInterval(ValidationError):
    """Raised when a clock-out instant is not after its clock-in."""


class InvalidTimeRange(ValidationError):
    """Raised when a declared clock-out time is not after the clock-in time."""


class RecordNotFound(ValidationError):
    """Raised when an attendance record id does not exist."""


class PaymentTransitionError(ValidationError):
    """Raised when a payment status change is not allowed."""


class DerivationFailure(DomainError):
    """Raised when a payment cannot be derived for one worker."""

    def __init__(self, worker_id: str, reason: str):
        super().__init__(f"{worker_id}: {reason}")
        self.worker_id = worker_id
        self.reason = reason


class InvariantViolation(DomainError):
    """Raised when stored state breaks an engine invariant (a bug, not bad input)."""
