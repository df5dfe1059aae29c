from __future__ import annotations

from ...core.enums import AttendanceStatus, DayKind, LeaveKind
from .base import AttendanceStrategy, ClassificationContext, StatusDecision

_LEAVE_STATUS = {
    LeaveKind.IZIN: AttendanceStatus.LEAVE,
    LeaveKind.CUTI: AttendanceStatus.PAID_LEAVE,
}

_NO_SCAN_STATUS = {
    DayKind.WEEKDAY: AttendanceStatus.UNEXCUSED,
    DayKind.WEEKEND: AttendanceStatus.HOLIDAY,
    DayKind.PUBLIC_HOLIDAY: AttendanceStatus.HOLIDAY,
}


class AbsenceStrategy(AttendanceStrategy):
    """No work recorded: authorized leave, unexcused absence or a day off."""

    def decide(self, ctx: ClassificationContext) -> StatusDecision:
        if ctx.leave is not None:
            notes = ("scan diabaikan karena ada izin/cuti",) if ctx.has_scan else ()
            return StatusDecision(status=_LEAVE_STATUS[ctx.leave], notes=notes)
        return StatusDecision(status=_NO_SCAN_STATUS[ctx.day_kind])
