from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Iterator, Mapping, Optional

from .model import PayPolicyVersion
from .repository import PayPolicyRepository


class InMemoryPayPolicyRepository(PayPolicyRepository):
    """Process-local store used by the `memory` backend and tests."""

    def __init__(self):
        self._lock = threading.Lock()
        self._versions: dict[int, PayPolicyVersion] = {}
        self._next_id = 1

    def add_and_activate(self, *, values: Mapping[str, int], at: datetime) -> PayPolicyVersion:
        with self._lock:
            setting_id = self._next_id
            self._next_id += 1
            self._deactivate_all(at)
            version = PayPolicyVersion(
                setting_id=setting_id,
                is_active=True,
                created_at=at,
                updated_at=at,
                **values,
            )
            self._versions[setting_id] = version
            return version

    def activate(self, setting_id: int, *, at: datetime) -> bool:
        with self._lock:
            target = self._versions.get(setting_id)
            if target is None:
                return False
            if target.is_active:
                return True
            self._deactivate_all(at)
            self._versions[setting_id] = replace(target, is_active=True, updated_at=at)
            return True

    def _deactivate_all(self, at: datetime) -> None:
        for sid, version in self._versions.items():
            if version.is_active:
                self._versions[sid] = replace(version, is_active=False, updated_at=at)

    def get(self, setting_id: int) -> Optional[PayPolicyVersion]:
        return self._versions.get(setting_id)

    def get_active(self) -> Optional[PayPolicyVersion]:
        with self._lock:
            return next((v for v in self._versions.values() if v.is_active), None)

    def iter_newest_first(self) -> Iterator[PayPolicyVersion]:
        with self._lock:
            ids = sorted(self._versions, key=lambda sid: (self._versions[sid].created_at, sid), reverse=True)
        for sid in ids:
            yield self._versions[sid]
