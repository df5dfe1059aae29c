from __future__ import annotations

import threading
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import PeriodClosedError
from .model import AttendanceDay
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._by_employee_date: dict[tuple[int, date], AttendanceDay] = {}
        self._closed: list[tuple[date, date]] = []

    def get(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        return self._by_employee_date.get((employee_id, work_date))

    def save(self, day: AttendanceDay) -> None:
        with self._lock:
            if self._is_closed(day.work_date):
                raise PeriodClosedError(
                    "Periode sudah ditutup, absensi tidak dapat diubah",
                    karyawan_id=day.employee_id,
                    tanggal=day.work_date,
                )
            self._by_employee_date[(day.employee_id, day.work_date)] = day

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceDay]:
        items = [
            d for (eid, work_date), d in self._by_employee_date.items() if eid == employee_id and start <= work_date <= end
        ]
        items.sort(key=lambda d: d.work_date)
        return items

    def close_period(self, *, start: date, end: date) -> None:
        with self._lock:
            self._closed.append((start, end))

    def is_closed(self, work_date: date) -> bool:
        with self._lock:
            return self._is_closed(work_date)

    def _is_closed(self, work_date: date) -> bool:
        return any(start <= work_date <= end for start, end in self._closed)
