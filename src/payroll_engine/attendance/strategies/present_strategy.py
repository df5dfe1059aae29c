from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, ClassificationContext, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Scan-in at or before shift start plus grace."""

    def decide(self, ctx: ClassificationContext) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
