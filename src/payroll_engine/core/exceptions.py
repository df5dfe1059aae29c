from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional, Sequence


def _plain(value: Any) -> Any:
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_plain(v) for v in value]
    return value


class DomainError(Exception):
    """Base exception for business rule violations.

    Every error carries a machine-readable ``kind`` plus a ``context`` dict so
    callers can render employee- or field-specific messages.
    """

    kind = "domain_error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": self.message,
            "context": {k: _plain(v) for k, v in self.context.items()},
        }


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"

    def __init__(self, message: str, errors: Sequence[FieldError] = (), **context: Any):
        super().__init__(message, **context)
        self.errors = list(errors)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["errors"] = [{"field": e.field, "message": e.message} for e in self.errors]
        return data


class NotFoundError(DomainError):
    """Raised when a policy version, payroll record or employee does not exist."""

    kind = "not_found"


class NoActivePolicyError(DomainError):
    """Raised when payroll is computed before any pay policy was activated."""

    kind = "no_active_policy"

    def __init__(self, message: str = "Belum ada setting gaji yang aktif", **context: Any):
        super().__init__(message, **context)


class NegativeNetPayError(DomainError):
    """Deductions exceed earnings.

    The payslip is still built; it travels on ``record`` flagged for review.
    """

    kind = "negative_net_pay"

    def __init__(self, message: str, record: Optional[Any] = None, **context: Any):
        super().__init__(message, **context)
        self.record = record


class PeriodClosedError(DomainError):
    """Raised when attendance inside a finalized pay period is changed."""

    kind = "period_closed"


class PayrollLockedError(DomainError):
    """Raised when a paid payroll record is modified."""

    kind = "payroll_locked"
