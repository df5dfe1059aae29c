from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Mapping, Optional

from ..common.datetime_utils import parse_clock, parse_iso_date
from ..core.enums import AttendanceStatus, DayKind, LeaveKind
from ..core.exceptions import FieldError, ValidationError


@dataclass(frozen=True)
class ScanEvent:
    """Raw scan pair for one employee and date (from the fingerprint import)."""

    employee_id: int
    work_date: date
    scan_in: Optional[time] = None
    scan_out: Optional[time] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "ScanEvent":
        try:
            return cls(
                employee_id=int(data["karyawan_id"]),
                work_date=parse_iso_date(str(data["tanggal"])),
                scan_in=parse_clock(data.get("jam_scan_masuk")),
                scan_out=parse_clock(data.get("jam_scan_pulang")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError("Data scan absensi tidak valid", errors=[FieldError("scan", str(exc))]) from exc


@dataclass(frozen=True)
class LeaveAuthorization:
    """Approved izin/cuti covering a date range (inclusive)."""

    employee_id: int
    start: date
    end: date
    kind: LeaveKind

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "LeaveAuthorization":
        try:
            start = parse_iso_date(str(data["tanggal_mulai"]))
            end = parse_iso_date(str(data.get("tanggal_selesai") or data["tanggal_mulai"]))
            kind = LeaveKind(str(data["jenis"]).lower())
            employee_id = int(data["karyawan_id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError("Data izin/cuti tidak valid", errors=[FieldError("izin", str(exc))]) from exc
        if end < start:
            raise ValidationError("Rentang izin/cuti terbalik", errors=[FieldError("tanggal_selesai", "sebelum tanggal_mulai")])
        return cls(employee_id=employee_id, start=start, end=end, kind=kind)


@dataclass(frozen=True)
class AttendanceDay:
    """Entitas domain: one classified attendance day (absensi).

    ``overtime_hours`` and ``total_supplemental_pay`` are derived so they can
    never drift from their inputs.
    """

    employee_id: int
    work_date: date
    status: AttendanceStatus
    day_kind: DayKind
    scan_in: Optional[time] = None
    scan_out: Optional[time] = None
    overtime_minutes: int = 0
    overtime_pay: int = 0
    premium: int = 0
    meal_allowance: int = 0
    six_day_streak: bool = False
    is_gap: bool = False
    warnings: tuple[str, ...] = ()

    def __post_init__(self):
        has_scan = self.scan_in is not None or self.scan_out is not None
        if self.status.is_absence and has_scan:
            raise ValueError(f"{self.status.value} day must not carry scan times")
        if self.status.is_attended and not has_scan:
            raise ValueError(f"{self.status.value} day needs at least one scan")
        for name in ("overtime_minutes", "overtime_pay", "premium", "meal_allowance"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def overtime_hours(self) -> int:
        """Payable whole hours; the remainder below one hour is tracked but unpaid."""
        return self.overtime_minutes // 60

    @property
    def total_supplemental_pay(self) -> int:
        return self.overtime_pay + self.premium + self.meal_allowance

    def to_dict(self) -> dict:
        return {
            "karyawan_id": self.employee_id,
            "tanggal_absensi": self.work_date.isoformat(),
            "jam_scan_masuk": self.scan_in.strftime("%H:%M") if self.scan_in else None,
            "jam_scan_pulang": self.scan_out.strftime("%H:%M") if self.scan_out else None,
            "status": self.status.value,
            "jenis_hari": self.day_kind.value,
            "durasi_lembur_menit": self.overtime_minutes,
            "jam_lembur": self.overtime_hours,
            "hadir_6_hari_periode": self.six_day_streak,
            "upah_lembur": self.overtime_pay,
            "premi": self.premium,
            "uang_makan": self.meal_allowance,
            "total_gaji_tambahan": self.total_supplemental_pay,
            "catatan": list(self.warnings),
        }
