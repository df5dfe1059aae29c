from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import AbstractSet, Optional, Sequence

from ..attendance.classifier import AttendanceClassifier
from ..attendance.model import AttendanceDay
from ..common.datetime_utils import iter_dates
from ..common.money import round_half_up
from ..core.enums import AttendanceStatus, DayKind
from ..core.exceptions import FieldError, ValidationError
from ..employees.model import EmployeeProfile

logger = logging.getLogger(__name__)

GAP_NOTE = "tanggal tanpa data absensi"


@dataclass(frozen=True)
class GapOverride:
    """Caller-supplied treatment for missing dates.

    ``status=None`` means the dates are not expected at all (for example after
    termination mid-period); otherwise the gap is recorded with that status.
    """

    start: date
    end: date
    status: Optional[AttendanceStatus] = AttendanceStatus.LEAVE

    def __post_init__(self):
        if self.status is not None and self.status.is_attended:
            raise ValidationError(
                "Override hanya untuk status ketidakhadiran",
                errors=[FieldError("status", self.status.value)],
            )

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class PeriodTotals:
    days_present: int
    days_late: int
    days_leave: int
    days_paid_leave: int
    days_unexcused: int
    days_holiday: int
    total_overtime_hours: int
    total_overtime_pay: int
    total_meal_allowance: int
    total_premium: int
    weekday_count: int
    attendance_rate: int
    gap_dates: tuple[date, ...] = ()
    warnings: tuple[str, ...] = field(default=())

    @property
    def days_worked(self) -> int:
        return self.days_present + self.days_late

    @property
    def days_on_leave(self) -> int:
        return self.days_leave + self.days_paid_leave

    @property
    def total_supplemental_pay(self) -> int:
        return self.total_overtime_pay + self.total_meal_allowance + self.total_premium

    def to_dict(self) -> dict:
        return {
            "totalHadir": self.days_present,
            "totalTerlambat": self.days_late,
            "totalIzin": self.days_leave,
            "totalCuti": self.days_paid_leave,
            "totalAlpha": self.days_unexcused,
            "totalLibur": self.days_holiday,
            "totalLembur": self.total_overtime_hours,
            "totalUpahLembur": self.total_overtime_pay,
            "totalUangMakan": self.total_meal_allowance,
            "totalPremi": self.total_premium,
            "totalGajiTambahan": self.total_supplemental_pay,
            "totalHariKerja": self.weekday_count,
            "persentaseKehadiran": self.attendance_rate,
            "tanggalKosong": [d.isoformat() for d in self.gap_dates],
        }


class PeriodAggregator:
    def __init__(self, classifier: AttendanceClassifier):
        self._classifier = classifier

    def weekday_count(self, start: date, end: date, holidays: AbstractSet[date] = frozenset()) -> int:
        return sum(1 for d in iter_dates(start, end) if self._classifier.day_kind(d, holidays) is DayKind.WEEKDAY)

    def fill_gaps(
        self,
        profile: EmployeeProfile,
        days: Sequence[AttendanceDay],
        *,
        start: date,
        end: date,
        holidays: AbstractSet[date] = frozenset(),
        overrides: Sequence[GapOverride] = (),
    ) -> list[AttendanceDay]:
        """One record per expected date in [start, end], ordered by date.

        Expected dates are those inside the employment window and not excluded
        by an override. A missing date is classified as if nothing was scanned
        (Unexcused on weekdays, Holiday otherwise) unless an override gives a
        status. Duplicate dates keep the last record and carry a warning.
        """
        by_date: dict[date, AttendanceDay] = {}
        for day in days:
            if not start <= day.work_date <= end:
                logger.debug("absensi %s di luar periode, diabaikan", day.work_date)
                continue
            if day.work_date in by_date:
                day = replace(day, warnings=day.warnings + ("data absensi ganda untuk tanggal ini",))
            by_date[day.work_date] = day

        out: list[AttendanceDay] = []
        for current in iter_dates(start, end):
            override = next((o for o in overrides if o.covers(current)), None)
            if current in by_date:
                out.append(by_date[current])
                continue
            if not profile.is_employed_on(current) or (override is not None and override.status is None):
                continue

            if override is not None:
                gap = AttendanceDay(
                    employee_id=profile.employee_id,
                    work_date=current,
                    status=override.status,
                    day_kind=self._classifier.day_kind(current, holidays),
                )
            else:
                gap = self._classifier.classify(profile, current, holidays=holidays)
            logger.warning("absensi karyawan %s %s kosong, dicatat %s", profile.employee_id, current, gap.status.value)
            out.append(replace(gap, is_gap=True, warnings=gap.warnings + (GAP_NOTE,)))
        return out

    def aggregate(
        self,
        days: Sequence[AttendanceDay],
        *,
        start: date,
        end: date,
        holidays: AbstractSet[date] = frozenset(),
    ) -> PeriodTotals:
        in_period = [d for d in days if start <= d.work_date <= end]
        counts = Counter(d.status for d in in_period)

        weekday_count = self.weekday_count(start, end, holidays)
        attended_weekdays = sum(1 for d in in_period if d.status.is_attended and d.day_kind is DayKind.WEEKDAY)
        if weekday_count == 0:
            rate = 0
        else:
            rate = round_half_up(Decimal(attended_weekdays * 100) / Decimal(weekday_count))

        warnings = tuple(f"{d.work_date.isoformat()}: {w}" for d in in_period for w in d.warnings)
        return PeriodTotals(
            days_present=counts[AttendanceStatus.PRESENT],
            days_late=counts[AttendanceStatus.LATE],
            days_leave=counts[AttendanceStatus.LEAVE],
            days_paid_leave=counts[AttendanceStatus.PAID_LEAVE],
            days_unexcused=counts[AttendanceStatus.UNEXCUSED],
            days_holiday=counts[AttendanceStatus.HOLIDAY],
            total_overtime_hours=sum(d.overtime_hours for d in in_period),
            total_overtime_pay=sum(d.overtime_pay for d in in_period),
            total_meal_allowance=sum(d.meal_allowance for d in in_period),
            total_premium=sum(d.premium for d in in_period),
            weekday_count=weekday_count,
            attendance_rate=rate,
            gap_dates=tuple(d.work_date for d in in_period if d.is_gap),
            warnings=warnings,
        )
