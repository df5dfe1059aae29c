from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def get(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def save(self, day: AttendanceDay) -> None:
        """Insert or re-classify one day; PeriodClosedError inside a closed period."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def close_period(self, *, start: date, end: date) -> None:
        raise NotImplementedError

    def is_closed(self, work_date: date) -> bool:
        raise NotImplementedError
