from __future__ import annotations

from datetime import date, time

import pytest

from payroll_engine.core.enums import ComponentKind, RoleKaryawan, SalaryCategory
from payroll_engine.core.exceptions import NegativeNetPayError, ValidationError
from payroll_engine.employees.model import EmployeeProfile, SalaryTerms
from payroll_engine.payroll.aggregator import PeriodTotals
from payroll_engine.payroll.payslip import DeductionEntry, PayslipBuilder, PayslipOptions
from payroll_engine.payroll.period import PayPeriod

PERIOD = PayPeriod.monthly(2024, 1)


def _profile(category=SalaryCategory.BULANAN, amount=3000000) -> EmployeeProfile:
    return EmployeeProfile(
        employee_id=5,
        full_name="Rina",
        role=RoleKaryawan.PRODUKSI,
        shift_start=time(8, 0),
        shift_end=time(17, 0),
        salary=SalaryTerms(category, amount),
    )


def _totals(**kwargs) -> PeriodTotals:
    data = dict(
        days_present=20,
        days_late=2,
        days_leave=1,
        days_paid_leave=0,
        days_unexcused=0,
        days_holiday=8,
        total_overtime_hours=10,
        total_overtime_pay=300000,
        total_meal_allowance=45000,
        total_premium=0,
        weekday_count=23,
        attendance_rate=96,
    )
    data.update(kwargs)
    return PeriodTotals(**data)


def test_net_pay_is_earnings_minus_deductions():
    record = PayslipBuilder().build(
        profile=_profile(),
        period=PERIOD,
        totals=_totals(),
        deductions=[DeductionEntry("Kasbon", 200000), DeductionEntry("BPJS", 60000)],
    )

    assert record.total_earnings == 3000000 + 300000 + 45000
    assert record.total_deductions == 260000
    assert record.final_net_pay == 3345000 - 260000
    assert record.period == "2024-01"
    assert [d.description for d in record.earnings] == ["Gaji Pokok", "Upah Lembur", "Uang Makan"]


def test_zero_supplemental_lines_are_omitted():
    record = PayslipBuilder().build(profile=_profile(), period=PERIOD, totals=_totals(total_overtime_pay=0, total_meal_allowance=0))

    assert [d.description for d in record.details] == ["Gaji Pokok"]


def test_daily_rate_counts_present_and_late_days():
    builder = PayslipBuilder()

    assert builder.base_pay(_profile(SalaryCategory.HARIAN, 100000), _totals()) == 22 * 100000


def test_piece_rate_requires_amount():
    builder = PayslipBuilder()

    with pytest.raises(ValidationError):
        builder.base_pay(_profile(SalaryCategory.BORONGAN, 0), _totals())
    assert builder.base_pay(_profile(SalaryCategory.BORONGAN, 0), _totals(), piece_rate_amount="1250000") == 1250000


def test_options_drop_components():
    record = PayslipBuilder().build(
        profile=_profile(),
        period=PERIOD,
        totals=_totals(),
        deductions=[DeductionEntry("Kasbon", 100000)],
        options=PayslipOptions(include_overtime=False, include_allowance=True, include_deduction=False),
    )

    assert [d.description for d in record.details] == ["Gaji Pokok", "Uang Makan"]
    assert record.deductions == ()


def test_negative_net_pay_returns_flagged_record():
    with pytest.raises(NegativeNetPayError) as exc_info:
        PayslipBuilder().build(
            profile=_profile(amount=1000000),
            period=PERIOD,
            totals=_totals(total_overtime_pay=0, total_meal_allowance=0),
            deductions=[DeductionEntry("Pinjaman", 1500000)],
        )

    record = exc_info.value.record
    assert record.needs_review is True
    assert record.final_net_pay == -500000
    assert {d.kind for d in record.details} == {ComponentKind.EARNING, ComponentKind.DEDUCTION}


def test_deduction_entry_validation():
    assert DeductionEntry.from_dict({"deskripsi": "PPh 21", "jumlah": "12500.5"}).amount == 12501

    with pytest.raises(ValidationError):
        DeductionEntry.from_dict({"deskripsi": "PPh 21", "jumlah": -1})
    with pytest.raises(ValidationError):
        DeductionEntry.from_dict({"deskripsi": " ", "jumlah": 10})


def test_period_labels_round_trip():
    assert PayPeriod.parse("2024-W03", "mingguan").start == date(2024, 1, 15)
    assert PayPeriod.weekly(date(2024, 1, 17)).label == "2024-W03"
    assert PayPeriod.parse("2024-02", "bulanan").end == date(2024, 2, 29)

    with pytest.raises(ValidationError):
        PayPeriod.parse("2024-13", "bulanan")
