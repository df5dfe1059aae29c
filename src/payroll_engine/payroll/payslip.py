from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Sequence

from ..common.money import to_rupiah
from ..common.validators import require_non_empty, require_non_negative_amount
from ..core.constants import LABEL_BASE_PAY, LABEL_MEAL, LABEL_OVERTIME, LABEL_PREMIUM
from ..core.enums import ComponentKind, SalaryCategory
from ..core.exceptions import FieldError, NegativeNetPayError, ValidationError
from ..employees.model import EmployeeProfile
from .aggregator import PeriodTotals
from .model import PayrollDetail, PayrollRecord
from .period import PayPeriod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeductionEntry:
    """Potongan from an external source (loan installment, tax withholding, ...)."""

    description: str
    amount: int

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "DeductionEntry":
        return cls(
            description=require_non_empty(str(data.get("deskripsi") or ""), "deskripsi"),
            amount=require_non_negative_amount(data.get("jumlah"), "jumlah"),
        )


@dataclass(frozen=True)
class PayslipOptions:
    """Switches from the payroll generation form."""

    include_overtime: bool = True
    include_allowance: bool = True
    include_deduction: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "PayslipOptions":
        return cls(
            include_overtime=bool(data.get("include_overtime", True)),
            include_allowance=bool(data.get("include_allowance", True)),
            include_deduction=bool(data.get("include_deduction", True)),
        )


class PayslipBuilder:
    def base_pay(self, profile: EmployeeProfile, totals: PeriodTotals, *, piece_rate_amount: Optional[object] = None) -> int:
        """Harian pays the daily rate for every worked day: Hadir and Terlambat both count."""
        category = profile.salary.category
        if category is SalaryCategory.BULANAN:
            return to_rupiah(profile.salary.amount)
        if category is SalaryCategory.HARIAN:
            return to_rupiah(profile.salary.amount) * totals.days_worked
        if category is SalaryCategory.BORONGAN:
            if piece_rate_amount is None:
                raise ValidationError(
                    "Upah borongan belum diisi",
                    errors=[FieldError("upah_borongan", "wajib untuk kategori Borongan")],
                    karyawan_id=profile.employee_id,
                )
            return require_non_negative_amount(piece_rate_amount, "upah_borongan")
        raise ValueError(f"Unhandled kategori gaji: {category!r}")

    def build(
        self,
        *,
        profile: EmployeeProfile,
        period: PayPeriod,
        totals: PeriodTotals,
        deductions: Sequence[DeductionEntry] = (),
        piece_rate_amount: Optional[object] = None,
        options: PayslipOptions = PayslipOptions(),
    ) -> PayrollRecord:
        """Itemize earnings and deductions into a draft PayrollRecord.

        Raises NegativeNetPayError, with the finished record flagged
        ``needs_review``, when deductions exceed earnings.
        """
        details = [PayrollDetail(ComponentKind.EARNING, LABEL_BASE_PAY, self.base_pay(profile, totals, piece_rate_amount=piece_rate_amount))]

        supplemental = []
        if options.include_overtime:
            supplemental.append((LABEL_OVERTIME, totals.total_overtime_pay))
        if options.include_allowance:
            supplemental.append((LABEL_MEAL, totals.total_meal_allowance))
            supplemental.append((LABEL_PREMIUM, totals.total_premium))
        details.extend(PayrollDetail(ComponentKind.EARNING, label, amount) for label, amount in supplemental if amount > 0)

        if options.include_deduction:
            for entry in deductions:
                amount = require_non_negative_amount(entry.amount, "jumlah")
                details.append(PayrollDetail(ComponentKind.DEDUCTION, require_non_empty(entry.description, "deskripsi"), amount))

        record = PayrollRecord(
            employee_id=profile.employee_id,
            period=period.label,
            period_type=period.period_type,
            period_start=period.start,
            period_end=period.end,
            details=tuple(details),
        )
        if record.final_net_pay < 0:
            record = replace(record, needs_review=True)
            logger.warning(
                "gaji karyawan %s periode %s negatif (%s), perlu ditinjau",
                profile.employee_id,
                period.label,
                record.final_net_pay,
            )
            raise NegativeNetPayError(
                "Potongan melebihi pendapatan",
                record=record,
                karyawan_id=profile.employee_id,
                periode=period.label,
                gaji_final=record.final_net_pay,
            )
        return record
