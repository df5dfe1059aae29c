from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ComponentKind, PayrollStatus, PeriodType


@dataclass(frozen=True)
class PayrollDetail:
    """DetailGaji: one slip line; sign is implied by ``kind``."""

    kind: ComponentKind
    description: str
    amount: int
    detail_id: Optional[int] = None

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("detail amount must not be negative")


@dataclass(frozen=True)
class PayrollRecord:
    """RiwayatGaji: one employee, one pay period. Owns its detail lines."""

    employee_id: int
    period: str
    period_type: PeriodType
    period_start: date
    period_end: date
    details: tuple[PayrollDetail, ...]
    record_id: Optional[int] = None
    payment_date: Optional[date] = None
    status: PayrollStatus = PayrollStatus.DRAFT
    needs_review: bool = False

    @property
    def earnings(self) -> tuple[PayrollDetail, ...]:
        return tuple(d for d in self.details if d.kind is ComponentKind.EARNING)

    @property
    def deductions(self) -> tuple[PayrollDetail, ...]:
        return tuple(d for d in self.details if d.kind is ComponentKind.DEDUCTION)

    @property
    def total_earnings(self) -> int:
        return sum(d.amount for d in self.earnings)

    @property
    def total_deductions(self) -> int:
        return sum(d.amount for d in self.deductions)

    @property
    def final_net_pay(self) -> int:
        return self.total_earnings - self.total_deductions

    @property
    def is_paid(self) -> bool:
        return self.payment_date is not None

    def overlaps(self, other: "PayrollRecord") -> bool:
        return self.period_start <= other.period_end and other.period_start <= self.period_end

    def to_dict(self) -> dict:
        return {
            "gaji_id": self.record_id,
            "karyawan_id": self.employee_id,
            "periode": self.period,
            "tipe_periode": self.period_type.value,
            "periode_mulai": self.period_start.isoformat(),
            "periode_selesai": self.period_end.isoformat(),
            "gaji_final": self.final_net_pay,
            "tanggal_pembayaran": self.payment_date.isoformat() if self.payment_date else None,
            "status": self.status.value,
            "perlu_ditinjau": self.needs_review,
            "detailGaji": [
                {
                    "detail_gaji_id": d.detail_id,
                    "gaji_id": self.record_id,
                    "jenis_komponen": d.kind.value,
                    "deskripsi": d.description,
                    "jumlah": d.amount,
                }
                for d in self.details
            ],
        }
