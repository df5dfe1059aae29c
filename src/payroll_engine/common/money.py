from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def to_decimal(value: object) -> Decimal:
    """Convert a submitted amount (int, str, float, Decimal) into Decimal.

    Raises ValueError for booleans, empty strings and anything non-numeric.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"not a number: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return amount


def to_rupiah(value: object) -> int:
    """Round to whole Rupiah, half-up (no fractional subunit)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return int(to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
