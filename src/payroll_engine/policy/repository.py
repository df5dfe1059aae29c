from __future__ import annotations

from datetime import datetime
from typing import Iterator, Mapping, Optional, Protocol

from .model import PayPolicyVersion


class PayPolicyRepository(Protocol):
    def add_and_activate(self, *, values: Mapping[str, int], at: datetime) -> PayPolicyVersion:
        """Persist a new version and make it the only active one, in one step."""

        raise NotImplementedError

    def activate(self, setting_id: int, *, at: datetime) -> bool:
        """Exclusive activation; False when the id does not exist."""

        raise NotImplementedError

    def get(self, setting_id: int) -> Optional[PayPolicyVersion]:
        raise NotImplementedError

    def get_active(self) -> Optional[PayPolicyVersion]:
        raise NotImplementedError

    def iter_newest_first(self) -> Iterator[PayPolicyVersion]:
        raise NotImplementedError
