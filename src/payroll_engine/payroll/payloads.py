"""JSON payload -> domain objects for the payroll and absensi endpoints."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from ..attendance.model import LeaveAuthorization, ScanEvent
from ..common.datetime_utils import parse_iso_date
from ..core.enums import AttendanceStatus, PeriodType
from ..core.exceptions import FieldError, ValidationError
from ..employees.model import EmployeeProfile
from .aggregator import GapOverride
from .batch import EmployeePayrollInput
from .payslip import DeductionEntry
from .period import PayPeriod


def parse_period(payload: Mapping[str, object]) -> PayPeriod:
    label = payload.get("periode")
    if not label:
        raise ValidationError("Periode wajib diisi", errors=[FieldError("periode", "wajib diisi")])
    try:
        period_type = PeriodType(payload.get("tipe_periode", PeriodType.BULANAN.value))
    except ValueError as exc:
        raise ValidationError("Tipe periode tidak valid", errors=[FieldError("tipe_periode", str(exc))]) from exc
    return PayPeriod.parse(str(label), period_type)


def parse_holidays(values: Iterable[object]) -> frozenset[date]:
    try:
        return frozenset(parse_iso_date(str(v)) for v in values)
    except ValueError as exc:
        raise ValidationError("Tanggal merah tidak valid", errors=[FieldError("tanggal_merah", str(exc))]) from exc


def _parse_override(data: Mapping[str, object]) -> GapOverride:
    try:
        start = parse_iso_date(str(data["tanggal_mulai"]))
        end = parse_iso_date(str(data.get("tanggal_selesai") or data["tanggal_mulai"]))
        status = data.get("status")
        return GapOverride(start=start, end=end, status=AttendanceStatus(status) if status else None)
    except (KeyError, ValueError) as exc:
        raise ValidationError("Override tanggal kosong tidak valid", errors=[FieldError("override", str(exc))]) from exc


def parse_employee_input(data: Mapping[str, object]) -> EmployeePayrollInput:
    """One karyawan entry: profile fields plus scans, izin, potongan, override."""
    profile = EmployeeProfile.from_dict(data)
    scans = []
    for raw in data.get("scans") or []:
        scans.append(ScanEvent.from_dict({"karyawan_id": profile.employee_id, **raw}))
    leaves = [
        LeaveAuthorization.from_dict({"karyawan_id": profile.employee_id, **raw}) for raw in data.get("izin") or []
    ]
    return EmployeePayrollInput(
        profile=profile,
        scans=scans,
        leaves=leaves,
        deductions=[DeductionEntry.from_dict(raw) for raw in data.get("potongan") or []],
        gap_overrides=[_parse_override(raw) for raw in data.get("override") or []],
        piece_rate_amount=data.get("upah_borongan"),
    )
