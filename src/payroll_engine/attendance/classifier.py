from __future__ import annotations

import logging
from datetime import date, time
from typing import AbstractSet, Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import DayKind, LeaveKind
from ..employees.model import EmployeeProfile
from .factory import AttendanceStrategyFactory
from .model import AttendanceDay, LeaveAuthorization, ScanEvent
from .strategies.base import ClassificationContext

logger = logging.getLogger(__name__)


class AttendanceClassifier:
    """Turn a scan pair plus calendar context into an AttendanceDay.

    Only the status, day-kind and overtime minutes are decided here; money is
    added later by the compensation calculator.

    Overtime is the minutes past shift end on every kind of day. Passing
    ``full_overtime_on_non_working_days=True`` counts every worked minute on
    weekends and public holidays instead.
    """

    def __init__(
        self,
        *,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        full_overtime_on_non_working_days: bool = False,
    ):
        self._grace_minutes = int(grace_minutes)
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._full_overtime_on_non_working_days = full_overtime_on_non_working_days

    @staticmethod
    def day_kind(work_date: date, holidays: AbstractSet[date] = frozenset()) -> DayKind:
        if work_date in holidays:
            return DayKind.PUBLIC_HOLIDAY
        if work_date.weekday() >= 5:
            return DayKind.WEEKEND
        return DayKind.WEEKDAY

    def classify(
        self,
        profile: EmployeeProfile,
        work_date: date,
        *,
        scan_in: Optional[time] = None,
        scan_out: Optional[time] = None,
        holidays: AbstractSet[date] = frozenset(),
        leave: Optional[LeaveKind] = None,
    ) -> AttendanceDay:
        day_kind = self.day_kind(work_date, holidays)
        ctx = ClassificationContext(
            profile=profile,
            work_date=work_date,
            day_kind=day_kind,
            scan_in=scan_in,
            scan_out=scan_out,
            grace_minutes=self._grace_minutes,
            # izin/cuti only consumes working days
            leave=leave if day_kind is DayKind.WEEKDAY else None,
        )
        decision = self._factory.for_day(ctx).decide(ctx)
        notes = list(decision.notes)

        if decision.status.is_absence:
            day = AttendanceDay(
                employee_id=profile.employee_id,
                work_date=work_date,
                status=decision.status,
                day_kind=ctx.day_kind,
                warnings=tuple(notes),
            )
        else:
            minutes = self._overtime_minutes(ctx, notes)
            day = AttendanceDay(
                employee_id=profile.employee_id,
                work_date=work_date,
                status=decision.status,
                day_kind=ctx.day_kind,
                scan_in=scan_in,
                scan_out=scan_out,
                overtime_minutes=minutes,
                warnings=tuple(notes),
            )

        if day.warnings:
            logger.warning("absensi karyawan %s %s: %s", profile.employee_id, work_date, "; ".join(day.warnings))
        return day

    def classify_event(
        self,
        profile: EmployeeProfile,
        event: ScanEvent,
        *,
        holidays: AbstractSet[date] = frozenset(),
        leaves: Sequence[LeaveAuthorization] = (),
    ) -> AttendanceDay:
        return self.classify(
            profile,
            event.work_date,
            scan_in=event.scan_in,
            scan_out=event.scan_out,
            holidays=holidays,
            leave=self.leave_for(event.work_date, leaves, employee_id=profile.employee_id),
        )

    @staticmethod
    def leave_for(work_date: date, leaves: Sequence[LeaveAuthorization], *, employee_id: int) -> Optional[LeaveKind]:
        for auth in leaves:
            if auth.employee_id == employee_id and auth.covers(work_date):
                return auth.kind
        return None

    def _overtime_minutes(self, ctx: ClassificationContext, notes: list[str]) -> int:
        if ctx.scan_out is None:
            notes.append("scan pulang tidak ada")
            return 0
        if ctx.scan_in is not None and ctx.scan_out < ctx.scan_in:
            notes.append("scan pulang lebih awal dari scan masuk")
            return 0

        if ctx.day_kind.is_non_working and self._full_overtime_on_non_working_days:
            reference = ctx.scan_in or ctx.profile.shift_start
        else:
            reference = ctx.profile.shift_end
        return max(0, minutes_between(reference, ctx.scan_out))
