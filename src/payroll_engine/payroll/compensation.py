from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from ..attendance.model import AttendanceDay
from ..core.enums import RoleKaryawan
from ..policy.model import PayPolicyVersion
from ..policy.service import PayPolicyStore
from .calculator.base import CompensationCalculator
from .calculator.standard_calculator import StandardCompensationCalculator


class DailyCompensationService:
    """Apply the active pay policy to classified days.

    The store is injected; callers running a batch pass an explicit policy
    snapshot instead so every employee sees the same rate table.
    """

    def __init__(self, policies: PayPolicyStore, *, calculator: Optional[CompensationCalculator] = None):
        self._policies = policies
        self._calculator = calculator or StandardCompensationCalculator()

    def apply(self, day: AttendanceDay, role: RoleKaryawan, *, policy: Optional[PayPolicyVersion] = None) -> AttendanceDay:
        return self.apply_all([day], role, policy=policy)[0]

    def apply_all(
        self,
        days: Sequence[AttendanceDay],
        role: RoleKaryawan,
        *,
        policy: Optional[PayPolicyVersion] = None,
    ) -> list[AttendanceDay]:
        """All-or-nothing: the policy is resolved before any day is touched."""
        policy = policy or self._policies.get_active()
        out = []
        for day in days:
            comp = self._calculator.compensate(day, role, policy)
            out.append(
                replace(
                    day,
                    overtime_pay=comp.overtime_pay,
                    meal_allowance=comp.meal_allowance,
                    premium=comp.premium,
                )
            )
        return out
