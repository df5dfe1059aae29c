from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollRecord


class PayrollRepository(Protocol):
    def add(self, record: PayrollRecord) -> PayrollRecord:
        """Persist a record with its detail lines; returns it with ids assigned."""

        raise NotImplementedError

    def update(self, record: PayrollRecord) -> None:
        """Update header fields (status, payment date, review flag)."""

        raise NotImplementedError

    def get(self, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        raise NotImplementedError
