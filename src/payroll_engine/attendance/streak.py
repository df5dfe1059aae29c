from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Sequence

from ..core.constants import PREMIUM_STREAK_DAYS
from ..core.enums import AttendanceStatus
from .model import AttendanceDay


def mark_six_day_streaks(
    days: Sequence[AttendanceDay],
    *,
    period_start: date,
    period_end: date,
    streak_length: int = PREMIUM_STREAK_DAYS,
) -> list[AttendanceDay]:
    """Set ``six_day_streak`` on every attended day inside an unbroken run.

    The window is the pay period: runs never continue across its bounds.
    Holiday days neither extend nor break a run; leave, unexcused absence and
    a missing date do break it. Days outside the period are dropped.
    """
    in_period = sorted((d for d in days if period_start <= d.work_date <= period_end), key=lambda d: d.work_date)

    qualifying: set[date] = set()
    run: list[date] = []
    previous: date | None = None

    def flush() -> None:
        if len(run) >= streak_length:
            qualifying.update(run)
        run.clear()

    for day in in_period:
        if previous is not None and day.work_date - previous > timedelta(days=1):
            flush()
        previous = day.work_date

        if day.status.is_attended:
            run.append(day.work_date)
        elif day.status is not AttendanceStatus.HOLIDAY:
            flush()
    flush()

    return [replace(d, six_day_streak=d.work_date in qualifying) for d in in_period]
