from __future__ import annotations

from ..core.exceptions import FieldError, ValidationError
from .money import to_decimal, to_rupiah


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(
            f"{field_name} tidak boleh kosong",
            errors=[FieldError(field_name, "tidak boleh kosong")],
        )
    return str(value).strip()


def check_non_negative_amount(value: object, field_name: str) -> tuple[int | None, FieldError | None]:
    """Validate one monetary value without raising.

    Returns (amount, None) on success or (None, error) so callers can collect
    every violated field before failing.
    """
    try:
        amount = to_decimal(value)
    except ValueError:
        return None, FieldError(field_name, "harus berupa angka")
    if amount < 0:
        return None, FieldError(field_name, "tidak boleh negatif")
    return to_rupiah(amount), None


def require_non_negative_amount(value: object, field_name: str) -> int:
    amount, error = check_non_negative_amount(value, field_name)
    if error:
        raise ValidationError(f"{field_name} {error.message}", errors=[error])
    return amount
