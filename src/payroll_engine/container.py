from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.classifier import AttendanceClassifier
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_MAX_WORKERS
from .database.connection import DatabaseConnection, DBConfig
from .payroll.aggregator import PeriodAggregator
from .payroll.batch import PayrollBatchRunner
from .payroll.compensation import DailyCompensationService
from .payroll.memory_payroll_repository import InMemoryPayrollRepository
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.payslip import PayslipBuilder
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .policy.memory_policy_repository import InMemoryPayPolicyRepository
from .policy.mysql_policy_repository import MySQLPayPolicyRepository
from .policy.repository import PayPolicyRepository
from .policy.service import PayPolicyStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    policies_repo: PayPolicyRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    policy_store: PayPolicyStore
    classifier: AttendanceClassifier
    compensation: DailyCompensationService
    aggregator: PeriodAggregator
    payslips: PayslipBuilder
    payroll_service: PayrollService
    batch_runner: PayrollBatchRunner


def build_container(
    *,
    storage_backend: str = "memory",
    db_config: Optional[dict[str, Any]] = None,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Container:
    conn: Optional[DatabaseConnection] = None
    if storage_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        policies_repo: PayPolicyRepository = MySQLPayPolicyRepository(conn)
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
        payroll_repo: PayrollRepository = MySQLPayrollRepository(conn)
    elif storage_backend == "memory":
        policies_repo = InMemoryPayPolicyRepository()
        attendance_repo = InMemoryAttendanceRepository()
        payroll_repo = InMemoryPayrollRepository()
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND: {storage_backend!r}")

    policy_store = PayPolicyStore(policies_repo)
    classifier = AttendanceClassifier(grace_minutes=grace_minutes)
    compensation = DailyCompensationService(policy_store)
    aggregator = PeriodAggregator(classifier)
    payslips = PayslipBuilder()
    payroll_service = PayrollService(payroll_repo, attendance_repo)
    batch_runner = PayrollBatchRunner(
        policy_store,
        classifier=classifier,
        compensation=compensation,
        aggregator=aggregator,
        payslips=payslips,
        payroll=payroll_service,
        attendance=attendance_repo,
        max_workers=max_workers,
    )

    return Container(
        conn=conn,
        policies_repo=policies_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        policy_store=policy_store,
        classifier=classifier,
        compensation=compensation,
        aggregator=aggregator,
        payslips=payslips,
        payroll_service=payroll_service,
        batch_runner=batch_runner,
    )
