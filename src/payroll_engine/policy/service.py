from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Iterator, Mapping

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_POLICY_VALUES
from ..core.exceptions import FieldError, NoActivePolicyError, NotFoundError
from .model import PayPolicyVersion, diff_versions, validate_policy_fields
from .repository import PayPolicyRepository

logger = logging.getLogger(__name__)


class PolicyHistory:
    """Lazy, restartable view over every version, newest first."""

    def __init__(self, policies: PayPolicyRepository):
        self._policies = policies

    def __iter__(self) -> Iterator[PayPolicyVersion]:
        return self._policies.iter_newest_first()


class PayPolicyStore:
    """Use case: manage setting gaji versions.

    Exactly one version is active after the first creation. Editing settings
    always creates a new version and activates it; older versions stay for
    audit and can be re-activated.
    """

    def __init__(self, policies: PayPolicyRepository, *, clock: Callable[[], datetime] = now_local):
        self._policies = policies
        self._clock = clock
        self._lock = threading.RLock()

    def validate_fields(self, fields: Mapping[str, object]) -> list[FieldError]:
        """Raise ValidationError on bad input; return zero-value warnings otherwise."""
        return validate_policy_fields(fields).warnings

    def create_version(self, fields: Mapping[str, object]) -> PayPolicyVersion:
        checked = validate_policy_fields(fields)
        for warning in checked.warnings:
            logger.warning("setting gaji: %s %s", warning.field, warning.message)

        with self._lock:
            version = self._policies.add_and_activate(values=checked.values, at=self._clock())
        logger.info("setting gaji v%s created and activated", version.setting_id)
        return version

    def activate(self, setting_id: int) -> PayPolicyVersion:
        with self._lock:
            if not self._policies.activate(int(setting_id), at=self._clock()):
                raise NotFoundError("Setting gaji tidak ditemukan", setting_id=setting_id)
            version = self._policies.get(int(setting_id))
        logger.info("setting gaji v%s activated", setting_id)
        return version

    def get_active(self) -> PayPolicyVersion:
        version = self._policies.get_active()
        if version is None:
            raise NoActivePolicyError()
        return version

    def snapshot(self) -> PayPolicyVersion:
        """Active version frozen for one payroll run; later activations do not affect it."""
        return self.get_active()

    def get(self, setting_id: int) -> PayPolicyVersion:
        version = self._policies.get(int(setting_id))
        if version is None:
            raise NotFoundError("Setting gaji tidak ditemukan", setting_id=setting_id)
        return version

    def list_history(self) -> PolicyHistory:
        return PolicyHistory(self._policies)

    def bootstrap_default(self) -> PayPolicyVersion:
        """Create the dashboard's default rate table, but only on an empty store."""
        with self._lock:
            existing = next(iter(self.list_history()), None)
            if existing is not None:
                return self.get_active()
            logger.info("no setting gaji yet; creating default version")
            return self.create_version(DEFAULT_POLICY_VALUES)

    def diff(self, old_id: int, new_id: int) -> list[dict]:
        return diff_versions(self.get(old_id), self.get(new_id))
