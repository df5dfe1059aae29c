from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import AbstractSet, Optional, Sequence

from ..attendance.classifier import AttendanceClassifier
from ..attendance.model import AttendanceDay, LeaveAuthorization, ScanEvent
from ..attendance.repository import AttendanceRepository
from ..attendance.streak import mark_six_day_streaks
from ..core.constants import DEFAULT_MAX_WORKERS
from ..core.enums import DayKind
from ..core.exceptions import DomainError, NegativeNetPayError, PeriodClosedError
from ..employees.model import EmployeeProfile
from ..policy.model import PayPolicyVersion
from ..policy.service import PayPolicyStore
from .aggregator import GapOverride, PeriodAggregator, PeriodTotals
from .compensation import DailyCompensationService
from .model import PayrollRecord
from .payslip import DeductionEntry, PayslipBuilder, PayslipOptions
from .period import PayPeriod
from .service import PayrollService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeePayrollInput:
    """Everything the collaborators supply for one employee and one period."""

    profile: EmployeeProfile
    scans: Sequence[ScanEvent] = ()
    leaves: Sequence[LeaveAuthorization] = ()
    deductions: Sequence[DeductionEntry] = ()
    gap_overrides: Sequence[GapOverride] = ()
    piece_rate_amount: Optional[int] = None


class CancellationToken:
    """Coarse cancellation: checked before each employee starts."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class BatchResult:
    policy: PayPolicyVersion
    period: PayPeriod
    records: list[PayrollRecord] = field(default_factory=list)
    flagged: list[PayrollRecord] = field(default_factory=list)
    failures: dict[int, DomainError] = field(default_factory=dict)
    cancelled: list[int] = field(default_factory=list)
    attendance: dict[int, list[AttendanceDay]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "setting_id": self.policy.setting_id,
            "periode": self.period.label,
            "tipe_periode": self.period.period_type.value,
            "riwayat_gaji": [r.to_dict() for r in self.records],
            "perlu_ditinjau": [r.to_dict() for r in self.flagged],
            "gagal": {str(eid): err.to_dict() for eid, err in self.failures.items()},
            "dibatalkan": list(self.cancelled),
        }


@dataclass(frozen=True)
class _Outcome:
    employee_id: int
    days: list[AttendanceDay] = field(default_factory=list)
    record: Optional[PayrollRecord] = None
    flagged: bool = False
    error: Optional[DomainError] = None
    cancelled: bool = False


class PayrollBatchRunner:
    """Generate payroll for many employees against one policy snapshot.

    Per employee the pipeline is strictly: classify -> fill gaps -> mark
    six-day runs -> compensate -> aggregate -> build slip. Employees run in
    parallel and share nothing but the (immutable) policy snapshot.
    """

    def __init__(
        self,
        policies: PayPolicyStore,
        *,
        classifier: AttendanceClassifier,
        compensation: DailyCompensationService,
        aggregator: PeriodAggregator,
        payslips: PayslipBuilder,
        payroll: Optional[PayrollService] = None,
        attendance: Optional[AttendanceRepository] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._policies = policies
        self._classifier = classifier
        self._compensation = compensation
        self._aggregator = aggregator
        self._payslips = payslips
        self._payroll = payroll
        self._attendance = attendance
        self._max_workers = max(1, int(max_workers))
        self._persist_lock = threading.Lock()

    def compute_attendance(
        self,
        item: EmployeePayrollInput,
        *,
        period: PayPeriod,
        policy: PayPolicyVersion,
        holidays: AbstractSet[date] = frozenset(),
    ) -> tuple[list[AttendanceDay], PeriodTotals]:
        profile = item.profile
        classified = [
            self._classifier.classify_event(profile, event, holidays=holidays, leaves=item.leaves)
            for event in item.scans
            if event.employee_id == profile.employee_id and period.contains(event.work_date)
        ]

        # Unscanned leave dates become Izin/Cuti on weekdays only; weekends stay Libur.
        scanned = {d.work_date for d in classified}
        for current in period.dates():
            if current in scanned or not profile.is_employed_on(current):
                continue
            if self._classifier.day_kind(current, holidays) is not DayKind.WEEKDAY:
                continue
            kind = self._classifier.leave_for(current, item.leaves, employee_id=profile.employee_id)
            if kind is not None:
                classified.append(self._classifier.classify(profile, current, holidays=holidays, leave=kind))

        days = self._aggregator.fill_gaps(
            profile,
            classified,
            start=period.start,
            end=period.end,
            holidays=holidays,
            overrides=item.gap_overrides,
        )
        days = mark_six_day_streaks(days, period_start=period.start, period_end=period.end)
        days = self._compensation.apply_all(days, profile.role, policy=policy)
        totals = self._aggregator.aggregate(days, start=period.start, end=period.end, holidays=holidays)
        return days, totals

    def compute_employee(
        self,
        item: EmployeePayrollInput,
        *,
        period: PayPeriod,
        policy: PayPolicyVersion,
        holidays: AbstractSet[date] = frozenset(),
        options: PayslipOptions = PayslipOptions(),
    ) -> tuple[list[AttendanceDay], PayrollRecord]:
        """Pure computation; NegativeNetPayError still carries the built record."""
        days, totals = self.compute_attendance(item, period=period, policy=policy, holidays=holidays)
        return days, self._build_slip(item, period=period, totals=totals, options=options)

    def _build_slip(
        self,
        item: EmployeePayrollInput,
        *,
        period: PayPeriod,
        totals: PeriodTotals,
        options: PayslipOptions,
    ) -> PayrollRecord:
        return self._payslips.build(
            profile=item.profile,
            period=period,
            totals=totals,
            deductions=item.deductions,
            piece_rate_amount=item.piece_rate_amount,
            options=options,
        )

    def run(
        self,
        items: Sequence[EmployeePayrollInput],
        *,
        period: PayPeriod,
        holidays: AbstractSet[date] = frozenset(),
        options: PayslipOptions = PayslipOptions(),
        cancel_token: Optional[CancellationToken] = None,
    ) -> BatchResult:
        policy = self._policies.snapshot()
        token = cancel_token or CancellationToken()
        result = BatchResult(policy=policy, period=period)
        logger.info("payroll %s: %d karyawan, setting gaji v%s", period.label, len(items), policy.setting_id)

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="payroll") as pool:
            futures = [
                pool.submit(self._run_one, item, period=period, policy=policy, holidays=holidays, options=options, token=token)
                for item in items
            ]
            outcomes = [f.result() for f in futures]

        for outcome in sorted(outcomes, key=lambda o: o.employee_id):
            if outcome.cancelled:
                result.cancelled.append(outcome.employee_id)
                continue
            if outcome.error is not None:
                result.failures[outcome.employee_id] = outcome.error
                continue
            result.attendance[outcome.employee_id] = outcome.days
            if outcome.flagged:
                result.flagged.append(outcome.record)
            else:
                result.records.append(outcome.record)

        logger.info(
            "payroll %s selesai: %d ok, %d ditinjau, %d gagal, %d dibatalkan",
            period.label,
            len(result.records),
            len(result.flagged),
            len(result.failures),
            len(result.cancelled),
        )
        return result

    def _run_one(
        self,
        item: EmployeePayrollInput,
        *,
        period: PayPeriod,
        policy: PayPolicyVersion,
        holidays: AbstractSet[date],
        options: PayslipOptions,
        token: CancellationToken,
    ) -> _Outcome:
        employee_id = item.profile.employee_id
        if token.cancelled:
            return _Outcome(employee_id=employee_id, cancelled=True)

        flagged = False
        try:
            days, totals = self.compute_attendance(item, period=period, policy=policy, holidays=holidays)
            try:
                record = self._build_slip(item, period=period, totals=totals, options=options)
            except NegativeNetPayError as exc:
                record, flagged = exc.record, True
            record = self._persist(days, record)
        except DomainError as exc:
            logger.warning("payroll karyawan %s gagal: %s", employee_id, exc.message)
            return _Outcome(employee_id=employee_id, error=exc)

        return _Outcome(employee_id=employee_id, days=days, record=record, flagged=flagged)

    def _persist(self, days: list[AttendanceDay], record: PayrollRecord) -> PayrollRecord:
        """Check the ledger and closed periods first; a rejected employee leaves no writes behind."""
        with self._persist_lock:
            if self._payroll is not None:
                self._payroll.check_can_save(record)
            if self._attendance is not None:
                closed = [d.work_date for d in days if self._attendance.is_closed(d.work_date)]
                if closed:
                    raise PeriodClosedError(
                        "Periode sudah ditutup, absensi tidak dapat diubah",
                        karyawan_id=record.employee_id,
                        tanggal=closed[0],
                    )
                for day in days:
                    self._attendance.save(day)
            if self._payroll is not None:
                record = self._payroll.save(record)
            return record
