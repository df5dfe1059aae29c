from datetime import date, time

from payroll_engine.attendance.factory import AttendanceStrategyFactory
from payroll_engine.attendance.strategies.absence_strategy import AbsenceStrategy
from payroll_engine.attendance.strategies.base import ClassificationContext
from payroll_engine.attendance.strategies.late_strategy import LateStrategy
from payroll_engine.attendance.strategies.present_strategy import PresentStrategy
from payroll_engine.core.enums import DayKind, LeaveKind, RoleKaryawan, SalaryCategory
from payroll_engine.employees.model import EmployeeProfile, SalaryTerms


def _ctx(scan_in, scan_out=time(17, 0), *, day_kind=DayKind.WEEKDAY, grace_minutes=0, leave=None):
    profile = EmployeeProfile(
        employee_id=1,
        full_name="A",
        role=RoleKaryawan.STAFF,
        shift_start=time(8, 0),
        shift_end=time(17, 0),
        salary=SalaryTerms(SalaryCategory.BULANAN, 0),
    )
    return ClassificationContext(
        profile=profile,
        work_date=date(2024, 1, 3),
        day_kind=day_kind,
        scan_in=scan_in,
        scan_out=scan_out,
        grace_minutes=grace_minutes,
        leave=leave,
    )


def test_factory_scan_in_at_shift_start_is_present():
    strategy = AttendanceStrategyFactory().for_day(_ctx(time(8, 0)))

    assert isinstance(strategy, PresentStrategy)


def test_factory_one_minute_late_without_grace():
    strategy = AttendanceStrategyFactory().for_day(_ctx(time(8, 1)))

    assert isinstance(strategy, LateStrategy)


def test_factory_checkin_on_time_within_grace():
    strategy = AttendanceStrategyFactory().for_day(_ctx(time(8, 4, 59), grace_minutes=5))

    assert isinstance(strategy, PresentStrategy)


def test_factory_weekend_scan_after_shift_start_is_late():
    late = AttendanceStrategyFactory().for_day(_ctx(time(10, 30), day_kind=DayKind.WEEKEND))
    on_time = AttendanceStrategyFactory().for_day(_ctx(time(8, 0), day_kind=DayKind.PUBLIC_HOLIDAY))

    assert isinstance(late, LateStrategy)
    assert isinstance(on_time, PresentStrategy)


def test_factory_leave_wins_over_scans():
    strategy = AttendanceStrategyFactory().for_day(_ctx(time(8, 0), leave=LeaveKind.CUTI))

    assert isinstance(strategy, AbsenceStrategy)


def test_factory_no_scan_is_absence():
    strategy = AttendanceStrategyFactory().for_day(_ctx(None, None))

    assert isinstance(strategy, AbsenceStrategy)
