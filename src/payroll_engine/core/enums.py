from __future__ import annotations

from enum import Enum


class RoleKaryawan(str, Enum):
    """Kategori karyawan yang menentukan tabel tarif."""

    PRODUKSI = "produksi"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Status absensi harian (nilai sesuai yang ditampilkan dashboard)."""

    PRESENT = "Hadir"
    LATE = "Terlambat"
    LEAVE = "Izin"
    PAID_LEAVE = "Cuti"
    UNEXCUSED = "Alpha"
    HOLIDAY = "Libur"

    @property
    def is_attended(self) -> bool:
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)

    @property
    def is_absence(self) -> bool:
        return not self.is_attended


class DayKind(str, Enum):
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    PUBLIC_HOLIDAY = "tanggal_merah"

    @property
    def is_non_working(self) -> bool:
        return self in (DayKind.WEEKEND, DayKind.PUBLIC_HOLIDAY)


class LeaveKind(str, Enum):
    """Jenis otorisasi ketidakhadiran dari modul izin/cuti."""

    IZIN = "izin"
    CUTI = "cuti"


class SalaryCategory(str, Enum):
    BULANAN = "Bulanan"
    HARIAN = "Harian"
    BORONGAN = "Borongan"


class PeriodType(str, Enum):
    HARIAN = "harian"
    MINGGUAN = "mingguan"
    BULANAN = "bulanan"


class ComponentKind(str, Enum):
    EARNING = "Pendapatan"
    DEDUCTION = "Potongan"


class PayrollStatus(str, Enum):
    """Alur status riwayat gaji: draft -> approved -> paid (atau cancelled)."""

    DRAFT = "draft"
    APPROVED = "approved"
    PAID = "paid"
    CANCELLED = "cancelled"
