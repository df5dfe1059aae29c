from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

from ..common.validators import check_non_negative_amount
from ..core.enums import RoleKaryawan
from ..core.exceptions import FieldError, ValidationError

POLICY_FIELDS = (
    "premium_production",
    "premium_staff",
    "meal_production_weekday",
    "meal_production_weekend_short",
    "meal_production_weekend_long",
    "meal_staff_weekday",
    "meal_staff_weekend_short",
    "meal_staff_weekend_long",
    "overtime_rate_production",
    "overtime_rate_staff",
)

# Column / JSON names used by the dashboard ("setting gaji").
WIRE_NAMES = {
    "premium_production": "premi_produksi",
    "premium_staff": "premi_staff",
    "meal_production_weekday": "uang_makan_produksi_weekday",
    "meal_production_weekend_short": "uang_makan_produksi_weekend_5_10",
    "meal_production_weekend_long": "uang_makan_produksi_weekend_10_20",
    "meal_staff_weekday": "uang_makan_staff_weekday",
    "meal_staff_weekend_short": "uang_makan_staff_weekend_5_10",
    "meal_staff_weekend_long": "uang_makan_staff_weekend_10_20",
    "overtime_rate_production": "tarif_lembur_produksi_per_jam",
    "overtime_rate_staff": "tarif_lembur_staff_per_jam",
}
FIELDS_BY_WIRE_NAME = {wire: field for field, wire in WIRE_NAMES.items()}


@dataclass(frozen=True)
class PayPolicyVersion:
    """Satu versi setting gaji.

    Rate fields never change after creation; only ``is_active`` (and
    ``updated_at``) follow activation changes made by the store.
    """

    setting_id: int
    premium_production: int
    premium_staff: int
    meal_production_weekday: int
    meal_production_weekend_short: int
    meal_production_weekend_long: int
    meal_staff_weekday: int
    meal_staff_weekend_short: int
    meal_staff_weekend_long: int
    overtime_rate_production: int
    overtime_rate_staff: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def _pick(self, role: RoleKaryawan, production: int, staff: int) -> int:
        if role is RoleKaryawan.PRODUKSI:
            return production
        if role is RoleKaryawan.STAFF:
            return staff
        raise ValueError(f"Unknown role_karyawan: {role!r}")

    def overtime_rate(self, role: RoleKaryawan) -> int:
        return self._pick(role, self.overtime_rate_production, self.overtime_rate_staff)

    def premium(self, role: RoleKaryawan) -> int:
        return self._pick(role, self.premium_production, self.premium_staff)

    def meal_weekday(self, role: RoleKaryawan) -> int:
        return self._pick(role, self.meal_production_weekday, self.meal_staff_weekday)

    def meal_weekend_short(self, role: RoleKaryawan) -> int:
        return self._pick(role, self.meal_production_weekend_short, self.meal_staff_weekend_short)

    def meal_weekend_long(self, role: RoleKaryawan) -> int:
        return self._pick(role, self.meal_production_weekend_long, self.meal_staff_weekend_long)

    def rates(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in POLICY_FIELDS}

    def to_dict(self) -> dict:
        data = {"setting_id": self.setting_id}
        data.update({WIRE_NAMES[name]: value for name, value in self.rates().items()})
        data.update(
            {
                "is_active": self.is_active,
                "created_at": self.created_at.isoformat(),
                "updated_at": self.updated_at.isoformat(),
            }
        )
        return data


@dataclass(frozen=True)
class PolicyValidation:
    values: dict[str, int]
    warnings: list[FieldError]


def validate_policy_fields(fields: Mapping[str, object]) -> PolicyValidation:
    """Check all ten rate fields; accepts attribute names or dashboard names.

    Every missing, non-numeric or negative field is reported in one
    ValidationError. A value of exactly 0 is accepted but returned as a warning.
    """
    normalized = {FIELDS_BY_WIRE_NAME.get(key, key): value for key, value in fields.items()}

    values: dict[str, int] = {}
    errors: list[FieldError] = []
    warnings: list[FieldError] = []
    for name in POLICY_FIELDS:
        if name not in normalized:
            errors.append(FieldError(name, "wajib diisi"))
            continue
        amount, error = check_non_negative_amount(normalized[name], name)
        if error:
            errors.append(error)
            continue
        if amount == 0:
            warnings.append(FieldError(name, "bernilai 0"))
        values[name] = amount

    if errors:
        raise ValidationError("Semua nilai harus positif", errors=errors)
    return PolicyValidation(values=values, warnings=warnings)


def diff_versions(old: PayPolicyVersion, new: PayPolicyVersion) -> list[dict]:
    """Field-level change summary between two versions (for the history view)."""
    changes = []
    for name in POLICY_FIELDS:
        before, after = getattr(old, name), getattr(new, name)
        if before != after:
            changes.append({"field": WIRE_NAMES[name], "before": before, "after": after})
    return changes
