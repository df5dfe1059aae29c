from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ...core.enums import AttendanceStatus, DayKind, LeaveKind
from ...employees.model import EmployeeProfile


@dataclass(frozen=True)
class ClassificationContext:
    profile: EmployeeProfile
    work_date: date
    day_kind: DayKind
    scan_in: Optional[time]
    scan_out: Optional[time]
    grace_minutes: int
    leave: Optional[LeaveKind] = None

    @property
    def has_scan(self) -> bool:
        return self.scan_in is not None or self.scan_out is not None


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    notes: tuple[str, ...] = ()


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, ctx: ClassificationContext) -> StatusDecision:
        raise NotImplementedError
