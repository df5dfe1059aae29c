from __future__ import annotations

import threading
from dataclasses import replace
from typing import Optional, Sequence

from .model import PayrollRecord
from .repository import PayrollRepository


class InMemoryPayrollRepository(PayrollRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[int, PayrollRecord] = {}
        self._next_id = 1
        self._next_detail_id = 1

    def add(self, record: PayrollRecord) -> PayrollRecord:
        with self._lock:
            record_id = self._next_id
            self._next_id += 1
            details = []
            for d in record.details:
                details.append(replace(d, detail_id=self._next_detail_id))
                self._next_detail_id += 1
            stored = replace(record, record_id=record_id, details=tuple(details))
            self._records[record_id] = stored
            return stored

    def update(self, record: PayrollRecord) -> None:
        with self._lock:
            self._records[record.record_id] = record

    def get(self, record_id: int) -> Optional[PayrollRecord]:
        return self._records.get(int(record_id))

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        with self._lock:
            items = [r for r in self._records.values() if r.employee_id == employee_id]
        return sorted(items, key=lambda r: r.period_start)

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        with self._lock:
            items = [r for r in self._records.values() if r.period == period]
        return sorted(items, key=lambda r: r.employee_id)
