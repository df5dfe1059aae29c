from __future__ import annotations

from datetime import date, datetime, time

import pytest

from payroll_engine.attendance.model import AttendanceDay
from payroll_engine.core.constants import DEFAULT_POLICY_VALUES
from payroll_engine.core.enums import AttendanceStatus, DayKind, RoleKaryawan
from payroll_engine.core.exceptions import NoActivePolicyError
from payroll_engine.payroll.calculator.standard_calculator import StandardCompensationCalculator
from payroll_engine.payroll.compensation import DailyCompensationService
from payroll_engine.policy.memory_policy_repository import InMemoryPayPolicyRepository
from payroll_engine.policy.model import PayPolicyVersion
from payroll_engine.policy.service import PayPolicyStore

AT = datetime(2024, 1, 1, 9, 0)


def _policy(**overrides) -> PayPolicyVersion:
    values = dict(DEFAULT_POLICY_VALUES)
    values.update(overrides)
    return PayPolicyVersion(setting_id=1, is_active=True, created_at=AT, updated_at=AT, **values)


def _worked(work_date, day_kind, scan_in, scan_out, overtime_minutes=0, status=AttendanceStatus.PRESENT, streak=False):
    return AttendanceDay(
        employee_id=1,
        work_date=work_date,
        status=status,
        day_kind=day_kind,
        scan_in=scan_in,
        scan_out=scan_out,
        overtime_minutes=overtime_minutes,
        six_day_streak=streak,
    )


def test_weekend_overtime_is_doubled_and_gets_short_meal():
    day = _worked(date(2024, 1, 6), DayKind.WEEKEND, time(8, 0), time(15, 0), overtime_minutes=7 * 60)

    comp = StandardCompensationCalculator().compensate(day, RoleKaryawan.PRODUKSI, _policy())

    assert comp.overtime_pay == 7 * 30000 * 2 == 420000
    assert comp.meal_allowance == 20000


@pytest.mark.parametrize("hours, expected", [(4, 0), (5, 20000), (9, 20000), (10, 25000), (19, 25000), (20, 0)])
def test_weekend_meal_brackets(hours, expected):
    day = _worked(date(2024, 1, 7), DayKind.WEEKEND, time(0, 0), time(23, 0), overtime_minutes=hours * 60)

    assert StandardCompensationCalculator().meal_allowance(day, RoleKaryawan.PRODUKSI, _policy()) == expected


@pytest.mark.parametrize("scan_out, expected", [(time(19, 5), 15000), (time(19, 0), 15000), (time(18, 59), 0)])
def test_weekday_meal_needs_scan_out_from_1900(scan_out, expected):
    day = _worked(date(2024, 1, 3), DayKind.WEEKDAY, time(8, 0), scan_out, overtime_minutes=60)

    comp = StandardCompensationCalculator().compensate(day, RoleKaryawan.STAFF, _policy())

    assert comp.meal_allowance == expected


def test_weekday_overtime_uses_single_rate():
    day = _worked(date(2024, 1, 3), DayKind.WEEKDAY, time(8, 0), time(19, 30), overtime_minutes=150)

    comp = StandardCompensationCalculator().compensate(day, RoleKaryawan.STAFF, _policy())

    assert comp.overtime_pay == 2 * 40000


def test_premium_requires_present_not_late():
    present = _worked(date(2024, 1, 3), DayKind.WEEKDAY, time(8, 0), time(17, 0), streak=True)
    late = _worked(date(2024, 1, 3), DayKind.WEEKDAY, time(8, 30), time(17, 0), status=AttendanceStatus.LATE, streak=True)
    calc = StandardCompensationCalculator()

    assert calc.compensate(present, RoleKaryawan.PRODUKSI, _policy()).premium == 20000
    assert calc.compensate(late, RoleKaryawan.PRODUKSI, _policy()).premium == 0


def test_absence_earns_nothing():
    day = AttendanceDay(employee_id=1, work_date=date(2024, 1, 3), status=AttendanceStatus.UNEXCUSED, day_kind=DayKind.WEEKDAY)

    comp = StandardCompensationCalculator().compensate(day, RoleKaryawan.PRODUKSI, _policy())

    assert comp.total == 0


def test_no_active_policy_leaves_days_untouched():
    service = DailyCompensationService(PayPolicyStore(InMemoryPayPolicyRepository()))
    days = [_worked(date(2024, 1, 6), DayKind.WEEKEND, time(8, 0), time(15, 0), overtime_minutes=420)]

    with pytest.raises(NoActivePolicyError):
        service.apply_all(days, RoleKaryawan.PRODUKSI)

    assert days[0].overtime_pay == 0
    assert days[0].meal_allowance == 0


def test_service_uses_active_version():
    store = PayPolicyStore(InMemoryPayPolicyRepository())
    store.create_version(dict(DEFAULT_POLICY_VALUES, overtime_rate_production=35000))
    service = DailyCompensationService(store)
    day = _worked(date(2024, 1, 3), DayKind.WEEKDAY, time(8, 0), time(18, 0), overtime_minutes=60)

    result = service.apply(day, RoleKaryawan.PRODUKSI)

    assert result.overtime_pay == 35000
    assert result.total_supplemental_pay == 35000
