from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .strategies.absence_strategy import AbsenceStrategy
from .strategies.base import AttendanceStrategy, ClassificationContext
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_day(self, ctx: ClassificationContext) -> AttendanceStrategy:
        if ctx.leave is not None or not ctx.has_scan:
            return AbsenceStrategy()

        # Same start-of-shift rule on weekdays, weekends and public holidays.
        if ctx.scan_in is None:
            return LateStrategy()

        shift_start = datetime.combine(ctx.work_date, ctx.profile.shift_start)
        scanned_in = datetime.combine(ctx.work_date, ctx.scan_in)
        if scanned_in <= shift_start + timedelta(minutes=ctx.grace_minutes):
            return PresentStrategy()
        return LateStrategy()
