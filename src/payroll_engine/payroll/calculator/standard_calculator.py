from __future__ import annotations

from ...attendance.model import AttendanceDay
from ...core.constants import (
    MEAL_WEEKDAY_CUTOFF,
    NON_WORKING_DAY_OVERTIME_MULTIPLIER,
    WEEKEND_MEAL_LONG_HOURS,
    WEEKEND_MEAL_SHORT_HOURS,
)
from ...core.enums import AttendanceStatus, DayKind, RoleKaryawan
from ...policy.model import PayPolicyVersion
from .base import CompensationCalculator, DailyCompensation


class StandardCompensationCalculator(CompensationCalculator):
    """Standard rules for upah lembur, uang makan and premi.

    - overtime: payable hours x role rate, doubled on weekends/public holidays
    - meal: weekday scan-out at or after 19:00; weekend brackets [5,10) / [10,20) hours
    - premium: only for a Present (not Late) day inside a six-day run
    """

    def compensate(self, day: AttendanceDay, role: RoleKaryawan, policy: PayPolicyVersion) -> DailyCompensation:
        if not day.status.is_attended:
            return DailyCompensation(overtime_pay=0, meal_allowance=0, premium=0)
        return DailyCompensation(
            overtime_pay=self.overtime_pay(day, role, policy),
            meal_allowance=self.meal_allowance(day, role, policy),
            premium=self.premium(day, role, policy),
        )

    def overtime_pay(self, day: AttendanceDay, role: RoleKaryawan, policy: PayPolicyVersion) -> int:
        multiplier = NON_WORKING_DAY_OVERTIME_MULTIPLIER if day.day_kind.is_non_working else 1
        return day.overtime_hours * policy.overtime_rate(role) * multiplier

    def meal_allowance(self, day: AttendanceDay, role: RoleKaryawan, policy: PayPolicyVersion) -> int:
        if day.day_kind is DayKind.WEEKDAY:
            if day.scan_out is not None and day.scan_out >= MEAL_WEEKDAY_CUTOFF:
                return policy.meal_weekday(role)
            return 0

        if day.day_kind in (DayKind.WEEKEND, DayKind.PUBLIC_HOLIDAY):
            hours = day.overtime_hours
            if WEEKEND_MEAL_SHORT_HOURS[0] <= hours < WEEKEND_MEAL_SHORT_HOURS[1]:
                return policy.meal_weekend_short(role)
            if WEEKEND_MEAL_LONG_HOURS[0] <= hours < WEEKEND_MEAL_LONG_HOURS[1]:
                return policy.meal_weekend_long(role)
            return 0

        raise ValueError(f"Unhandled day kind: {day.day_kind!r}")

    def premium(self, day: AttendanceDay, role: RoleKaryawan, policy: PayPolicyVersion) -> int:
        if day.six_day_streak and day.status is AttendanceStatus.PRESENT:
            return policy.premium(role)
        return 0
