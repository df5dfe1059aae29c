from __future__ import annotations

from datetime import date, time

import pytest

from payroll_engine.attendance.classifier import AttendanceClassifier
from payroll_engine.core.enums import AttendanceStatus, RoleKaryawan, SalaryCategory
from payroll_engine.core.exceptions import ValidationError
from payroll_engine.employees.model import EmployeeProfile, SalaryTerms
from payroll_engine.payroll.aggregator import GAP_NOTE, GapOverride, PeriodAggregator

MONDAY = date(2024, 1, 8)
FRIDAY = date(2024, 1, 12)
SUNDAY = date(2024, 1, 14)


def _profile(**kwargs) -> EmployeeProfile:
    data = dict(
        employee_id=1,
        full_name="Andi",
        role=RoleKaryawan.STAFF,
        shift_start=time(8, 0),
        shift_end=time(17, 0),
        salary=SalaryTerms(SalaryCategory.BULANAN, 4000000),
    )
    data.update(kwargs)
    return EmployeeProfile(**data)


def _worked(classifier, profile, work_date, scan_in=time(8, 0), scan_out=time(17, 0)):
    return classifier.classify(profile, work_date, scan_in=scan_in, scan_out=scan_out)


def test_all_holiday_period_has_zero_rate():
    classifier = AttendanceClassifier()
    aggregator = PeriodAggregator(classifier)
    holidays = {date(2024, 1, 8), date(2024, 1, 9)}

    days = aggregator.fill_gaps(_profile(), [], start=date(2024, 1, 8), end=date(2024, 1, 9), holidays=holidays)
    totals = aggregator.aggregate(days, start=date(2024, 1, 8), end=date(2024, 1, 9), holidays=holidays)

    assert totals.weekday_count == 0
    assert totals.attendance_rate == 0
    assert totals.days_holiday == 2


def test_gaps_are_filled_and_counted():
    classifier = AttendanceClassifier()
    aggregator = PeriodAggregator(classifier)
    profile = _profile()
    scanned = [_worked(classifier, profile, MONDAY), _worked(classifier, profile, date(2024, 1, 9), scan_in=time(8, 20))]

    days = aggregator.fill_gaps(profile, scanned, start=MONDAY, end=SUNDAY)
    totals = aggregator.aggregate(days, start=MONDAY, end=SUNDAY)

    assert [d.work_date for d in days] == [date(2024, 1, d) for d in range(8, 15)]
    assert (totals.days_present, totals.days_late, totals.days_unexcused, totals.days_holiday) == (1, 1, 3, 2)
    assert totals.weekday_count == 5
    assert totals.attendance_rate == 40
    assert len(totals.gap_dates) == 5
    assert all(GAP_NOTE in d.warnings for d in days if d.is_gap)


def test_attendance_rate_rounds_half_up():
    classifier = AttendanceClassifier()
    aggregator = PeriodAggregator(classifier)
    profile = _profile()
    # 2024-01-01 .. 2024-01-08 holds six weekdays; five attended -> 83.33 -> 83
    start, end = date(2024, 1, 1), date(2024, 1, 8)
    scanned = [_worked(classifier, profile, date(2024, 1, d)) for d in (1, 2, 3, 4, 5)]

    totals = aggregator.aggregate(aggregator.fill_gaps(profile, scanned, start=start, end=end), start=start, end=end)

    assert totals.weekday_count == 6
    assert totals.attendance_rate == 83


def test_override_turns_gap_into_leave():
    classifier = AttendanceClassifier()
    aggregator = PeriodAggregator(classifier)

    days = aggregator.fill_gaps(
        _profile(),
        [],
        start=MONDAY,
        end=FRIDAY,
        overrides=[GapOverride(MONDAY, date(2024, 1, 9), AttendanceStatus.PAID_LEAVE)],
    )

    assert [d.status for d in days[:3]] == [
        AttendanceStatus.PAID_LEAVE,
        AttendanceStatus.PAID_LEAVE,
        AttendanceStatus.UNEXCUSED,
    ]


def test_override_without_status_excludes_dates():
    aggregator = PeriodAggregator(AttendanceClassifier())

    days = aggregator.fill_gaps(_profile(), [], start=MONDAY, end=FRIDAY, overrides=[GapOverride(date(2024, 1, 11), FRIDAY, None)])

    assert [d.work_date for d in days] == [MONDAY, date(2024, 1, 9), date(2024, 1, 10)]


def test_override_rejects_attended_status():
    with pytest.raises(ValidationError):
        GapOverride(MONDAY, FRIDAY, AttendanceStatus.PRESENT)


def test_dates_outside_employment_are_not_expected():
    aggregator = PeriodAggregator(AttendanceClassifier())

    days = aggregator.fill_gaps(_profile(employment_end=date(2024, 1, 9)), [], start=MONDAY, end=FRIDAY)

    assert [d.work_date for d in days] == [MONDAY, date(2024, 1, 9)]


def test_duplicate_date_keeps_last_with_warning():
    classifier = AttendanceClassifier()
    aggregator = PeriodAggregator(classifier)
    profile = _profile()
    first = _worked(classifier, profile, MONDAY, scan_in=time(9, 0))
    second = _worked(classifier, profile, MONDAY, scan_in=time(7, 55))

    days = aggregator.fill_gaps(profile, [first, second], start=MONDAY, end=MONDAY)

    assert len(days) == 1
    assert days[0].status is AttendanceStatus.PRESENT
    assert "data absensi ganda untuk tanggal ini" in days[0].warnings
