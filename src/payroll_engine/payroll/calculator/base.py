from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...attendance.model import AttendanceDay
from ...core.enums import RoleKaryawan
from ...policy.model import PayPolicyVersion


@dataclass(frozen=True)
class DailyCompensation:
    overtime_pay: int
    meal_allowance: int
    premium: int

    @property
    def total(self) -> int:
        return self.overtime_pay + self.meal_allowance + self.premium


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compensate(self, day: AttendanceDay, role: RoleKaryawan, policy: PayPolicyVersion) -> DailyCompensation:
        raise NotImplementedError
