from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

from ..common.datetime_utils import iter_dates, parse_iso_date
from ..core.enums import PeriodType
from ..core.exceptions import FieldError, ValidationError


@dataclass(frozen=True)
class PayPeriod:
    """Periode gaji: a contiguous, inclusive date range plus its type."""

    period_type: PeriodType
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError(
                "Periode tidak valid",
                errors=[FieldError("periode_selesai", "sebelum periode_mulai")],
            )

    @classmethod
    def monthly(cls, year: int, month: int) -> "PayPeriod":
        last = calendar.monthrange(year, month)[1]
        return cls(PeriodType.BULANAN, date(year, month, 1), date(year, month, last))

    @classmethod
    def weekly(cls, any_day: date) -> "PayPeriod":
        """ISO week (Monday to Sunday) containing ``any_day``."""
        monday = any_day - timedelta(days=any_day.weekday())
        return cls(PeriodType.MINGGUAN, monday, monday + timedelta(days=6))

    @classmethod
    def daily(cls, day: date) -> "PayPeriod":
        return cls(PeriodType.HARIAN, day, day)

    @classmethod
    def parse(cls, label: str, period_type: PeriodType | str) -> "PayPeriod":
        """Inverse of ``label``: '2024-01', '2024-W03' or '2024-01-15'."""
        kind = PeriodType(period_type)
        try:
            if kind is PeriodType.BULANAN:
                parsed = datetime.strptime(label, "%Y-%m")
                return cls.monthly(parsed.year, parsed.month)
            if kind is PeriodType.MINGGUAN:
                year, week = label.split("-W")
                return cls.weekly(date.fromisocalendar(int(year), int(week), 1))
            return cls.daily(parse_iso_date(label))
        except ValueError as exc:
            raise ValidationError(
                f"Label periode '{label}' tidak valid untuk tipe {kind.value}",
                errors=[FieldError("periode", str(exc))],
            ) from exc

    @property
    def label(self) -> str:
        if self.period_type is PeriodType.BULANAN:
            return self.start.strftime("%Y-%m")
        if self.period_type is PeriodType.MINGGUAN:
            year, week, _ = self.start.isocalendar()
            return f"{year}-W{week:02d}"
        return self.start.isoformat()

    def dates(self) -> Iterator[date]:
        return iter_dates(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, start: date, end: date) -> bool:
        return self.start <= end and start <= self.end
