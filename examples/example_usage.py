"""Contoh: jalankan payroll satu minggu lewat service layer (tanpa Flask, backend memory)."""

import sys
from datetime import date, time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from payroll_engine.attendance.model import ScanEvent
from payroll_engine.container import build_container
from payroll_engine.core.enums import RoleKaryawan, SalaryCategory
from payroll_engine.employees.model import EmployeeProfile, SalaryTerms
from payroll_engine.payroll.batch import EmployeePayrollInput
from payroll_engine.payroll.payslip import DeductionEntry
from payroll_engine.payroll.period import PayPeriod


def main():
    container = build_container(storage_backend="memory")
    container.policy_store.bootstrap_default()

    period = PayPeriod.weekly(date(2024, 1, 8))
    profile = EmployeeProfile(
        employee_id=1,
        full_name="Budi Santoso",
        role=RoleKaryawan.PRODUKSI,
        shift_start=time(8, 0),
        shift_end=time(17, 0),
        salary=SalaryTerms(SalaryCategory.HARIAN, 120000),
    )
    scans = [ScanEvent(1, d, time(7, 55), time(19, 10)) for d in period.dates() if d.weekday() < 5]
    scans.append(ScanEvent(1, date(2024, 1, 13), time(8, 0), time(22, 0)))

    result = container.batch_runner.run(
        [EmployeePayrollInput(profile=profile, scans=scans, deductions=[DeductionEntry("Kasbon", 50000)])],
        period=period,
    )
    for record in result.records:
        print(record.period, record.employee_id, record.final_net_pay)
        for line in record.details:
            print(f"  {line.kind.value:<10} {line.description:<16} {line.amount:>10}")


if __name__ == "__main__":
    main()
