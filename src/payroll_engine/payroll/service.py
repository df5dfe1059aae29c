from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, PayrollLockedError, ValidationError
from .model import PayrollRecord
from .period import PayPeriod
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Use case: keep the riwayat gaji ledger consistent.

    - live (non-cancelled) records of one employee never overlap
    - a record with a payment date is read-only
    """

    def __init__(self, payroll: PayrollRepository, attendance: Optional[AttendanceRepository] = None):
        self._payroll = payroll
        self._attendance = attendance
        self._lock = threading.Lock()

    def save(self, record: PayrollRecord) -> PayrollRecord:
        with self._lock:
            self._ensure_no_overlap(record)
            return self._payroll.add(record)

    def check_can_save(self, record: PayrollRecord) -> None:
        """Raise the same error ``save`` would, without writing anything."""
        with self._lock:
            self._ensure_no_overlap(record)

    def _ensure_no_overlap(self, record: PayrollRecord) -> None:
        for existing in self._payroll.list_for_employee(record.employee_id):
            if existing.status is not PayrollStatus.CANCELLED and existing.overlaps(record):
                raise ValidationError(
                    "Periode gaji bertumpuk dengan riwayat gaji lain",
                    karyawan_id=record.employee_id,
                    periode=record.period,
                    gaji_id=existing.record_id,
                )

    def get(self, record_id: int) -> PayrollRecord:
        record = self._payroll.get(int(record_id))
        if record is None:
            raise NotFoundError("Riwayat gaji tidak ditemukan", gaji_id=record_id)
        return record

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        return self._payroll.list_for_period(period)

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        return self._payroll.list_for_employee(employee_id)

    def approve(self, record_id: int) -> PayrollRecord:
        record = self._editable(record_id)
        if record.status is not PayrollStatus.DRAFT:
            raise ValidationError("Hanya gaji berstatus draft yang dapat disetujui", gaji_id=record_id, status=record.status.value)
        if record.needs_review:
            raise ValidationError("Gaji negatif perlu ditinjau sebelum disetujui", gaji_id=record_id)
        return self._store(replace(record, status=PayrollStatus.APPROVED))

    def mark_paid(self, record_id: int, payment_date: date) -> PayrollRecord:
        record = self._editable(record_id)
        if record.status is not PayrollStatus.APPROVED:
            raise ValidationError("Gaji harus disetujui sebelum dibayar", gaji_id=record_id, status=record.status.value)
        paid = self._store(replace(record, status=PayrollStatus.PAID, payment_date=payment_date))
        logger.info("gaji %s karyawan %s dibayar %s", record_id, record.employee_id, payment_date)
        return paid

    def cancel(self, record_id: int) -> PayrollRecord:
        record = self._editable(record_id)
        return self._store(replace(record, status=PayrollStatus.CANCELLED))

    def finalize_period(self, period: PayPeriod) -> None:
        """Close attendance for the period so days can no longer be re-classified."""
        if self._attendance is None:
            raise ValidationError("Repository absensi tidak tersedia")
        self._attendance.close_period(start=period.start, end=period.end)
        logger.info("periode %s ditutup", period.label)

    def _editable(self, record_id: int) -> PayrollRecord:
        record = self.get(record_id)
        if record.is_paid:
            raise PayrollLockedError("Gaji yang sudah dibayar tidak dapat diubah", gaji_id=record_id)
        if record.status is PayrollStatus.CANCELLED:
            raise ValidationError("Gaji sudah dibatalkan", gaji_id=record_id)
        return record

    def _store(self, record: PayrollRecord) -> PayrollRecord:
        self._payroll.update(record)
        return record
