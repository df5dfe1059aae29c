from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, ClassificationContext, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late scan-in; a missing scan-in cannot prove punctuality."""

    def decide(self, ctx: ClassificationContext) -> StatusDecision:
        if ctx.scan_in is None:
            return StatusDecision(status=AttendanceStatus.LATE, notes=("scan masuk tidak ada",))
        return StatusDecision(status=AttendanceStatus.LATE)
