from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from .model import ScanEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FingerprintLog:
    """One raw device punch; device protocol details stay outside the engine."""

    pin: str
    scan_time: datetime
    device_sn: Optional[str] = None


def pair_fingerprint_logs(logs: Iterable[FingerprintLog], pin_map: Mapping[str, int]) -> list[ScanEvent]:
    """Collapse punches into one scan pair per employee per date.

    Earliest punch is scan-in, latest is scan-out; a single punch yields a
    scan-in only. Unknown PINs are skipped with a warning.
    """
    grouped: dict[tuple[int, date], list[datetime]] = defaultdict(list)
    for log in logs:
        employee_id = pin_map.get(log.pin)
        if employee_id is None:
            logger.warning("fingerprint pin %s (device %s) tidak terdaftar", log.pin, log.device_sn or "-")
            continue
        grouped[(employee_id, log.scan_time.date())].append(log.scan_time)

    events = []
    for (employee_id, work_date), stamps in sorted(grouped.items()):
        stamps.sort()
        events.append(
            ScanEvent(
                employee_id=employee_id,
                work_date=work_date,
                scan_in=stamps[0].time(),
                scan_out=stamps[-1].time() if len(stamps) > 1 else None,
            )
        )
    return events
