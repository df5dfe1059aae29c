from datetime import date, datetime, time

from payroll_engine.attendance.fingerprint import FingerprintLog, pair_fingerprint_logs


def test_earliest_and_latest_punch_form_the_pair():
    logs = [
        FingerprintLog("101", datetime(2024, 1, 3, 12, 0)),
        FingerprintLog("101", datetime(2024, 1, 3, 7, 58)),
        FingerprintLog("101", datetime(2024, 1, 3, 17, 5)),
    ]

    events = pair_fingerprint_logs(logs, {"101": 7})

    assert len(events) == 1
    assert events[0].employee_id == 7
    assert events[0].work_date == date(2024, 1, 3)
    assert (events[0].scan_in, events[0].scan_out) == (time(7, 58), time(17, 5))


def test_single_punch_is_scan_in_only():
    events = pair_fingerprint_logs([FingerprintLog("101", datetime(2024, 1, 3, 8, 0))], {"101": 7})

    assert events[0].scan_in == time(8, 0)
    assert events[0].scan_out is None


def test_unknown_pin_is_skipped():
    logs = [
        FingerprintLog("999", datetime(2024, 1, 3, 8, 0), device_sn="SN-1"),
        FingerprintLog("101", datetime(2024, 1, 4, 8, 0)),
    ]

    events = pair_fingerprint_logs(logs, {"101": 7})

    assert [(e.employee_id, e.work_date) for e in events] == [(7, date(2024, 1, 4))]
