from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Mapping, Optional

from ..common.datetime_utils import parse_clock, parse_iso_date
from ..common.validators import require_non_negative_amount
from ..core.enums import RoleKaryawan, SalaryCategory
from ..core.exceptions import FieldError, ValidationError


@dataclass(frozen=True)
class SalaryTerms:
    """Ketentuan gaji pokok dari master karyawan.

    ``amount`` is the fixed amount per period for Bulanan and the daily rate
    for Harian. Borongan pay is supplied per run.
    """

    category: SalaryCategory
    amount: int = 0


@dataclass(frozen=True)
class EmployeeProfile:
    """Read-only view of the employee master data the engine needs."""

    employee_id: int
    full_name: str
    role: RoleKaryawan
    shift_start: time
    shift_end: time
    salary: SalaryTerms
    employment_start: Optional[date] = None
    employment_end: Optional[date] = None

    def is_employed_on(self, day: date) -> bool:
        if self.employment_start and day < self.employment_start:
            return False
        if self.employment_end and day > self.employment_end:
            return False
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "EmployeeProfile":
        """Build from the karyawan payload (role_karyawan, jam_kerja_masuk, ...)."""
        try:
            role = RoleKaryawan(str(data["role_karyawan"]).lower())
            category = SalaryCategory(data.get("kategori_gaji", SalaryCategory.BULANAN.value))
            shift_start = parse_clock(data.get("jam_kerja_masuk") or "08:00")
            shift_end = parse_clock(data.get("jam_kerja_pulang") or "17:00")
            employee_id = int(data["karyawan_id"])
            start = data.get("tanggal_masuk")
            end = data.get("tanggal_keluar")
            employment_start = parse_iso_date(str(start)) if start else None
            employment_end = parse_iso_date(str(end)) if end else None
        except (KeyError, TypeError, ValueError) as exc:
            raise ValidationError(
                "Data karyawan tidak valid",
                errors=[FieldError("karyawan", str(exc))],
            ) from exc

        amount = require_non_negative_amount(data.get("gaji_pokok", 0), "gaji_pokok")
        return cls(
            employee_id=employee_id,
            full_name=str(data.get("nama_lengkap") or ""),
            role=role,
            shift_start=shift_start,
            shift_end=shift_end,
            salary=SalaryTerms(category=category, amount=amount),
            employment_start=employment_start,
            employment_end=employment_end,
        )
