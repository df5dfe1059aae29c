from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from typing import Optional, Sequence

from ..core.enums import ComponentKind, PayrollStatus, PeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, placeholders
from .model import PayrollDetail, PayrollRecord
from .repository import PayrollRepository


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, record: PayrollRecord) -> PayrollRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO riwayat_gaji(
                    karyawan_id, periode, tipe_periode, periode_mulai, periode_selesai,
                    gaji_final, tanggal_pembayaran, status, needs_review
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.period,
                    record.period_type.value,
                    record.period_start,
                    record.period_end,
                    record.final_net_pay,
                    record.payment_date,
                    record.status.value,
                    int(record.needs_review),
                ),
            )
            record_id = int(cur.lastrowid)

            details = []
            for d in record.details:
                cur.execute(
                    "INSERT INTO detail_gaji(gaji_id, jenis_komponen, deskripsi, jumlah) VALUES(%s,%s,%s,%s)",
                    (record_id, d.kind.value, d.description, d.amount),
                )
                details.append(replace(d, detail_id=int(cur.lastrowid)))
        return replace(record, record_id=record_id, details=tuple(details))

    def update(self, record: PayrollRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE riwayat_gaji
                SET tanggal_pembayaran=%s, status=%s, needs_review=%s
                WHERE gaji_id=%s
                """,
                (record.payment_date, record.status.value, int(record.needs_review), int(record.record_id)),
            )

    def get(self, record_id: int) -> Optional[PayrollRecord]:
        found = self._select("r.gaji_id=%s", (int(record_id),))
        return found[0] if found else None

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        return self._select("r.karyawan_id=%s", (int(employee_id),))

    def list_for_period(self, period: str) -> Sequence[PayrollRecord]:
        return self._select("r.periode=%s", (period,))

    def _select(self, where: str, params: tuple) -> list[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT r.gaji_id, r.karyawan_id, r.periode, r.tipe_periode, r.periode_mulai, r.periode_selesai,
                       r.tanggal_pembayaran, r.status, r.needs_review
                FROM riwayat_gaji r
                WHERE {where}
                ORDER BY r.periode_mulai ASC, r.karyawan_id ASC
                """,
                params,
            )
            headers = fetchall(cur)
            if not headers:
                return []

            ids = [int(h["gaji_id"]) for h in headers]
            marks = placeholders(ids)
            cur.execute(
                f"""
                SELECT detail_gaji_id, gaji_id, jenis_komponen, deskripsi, jumlah
                FROM detail_gaji
                WHERE gaji_id IN ({marks})
                ORDER BY detail_gaji_id ASC
                """,
                tuple(ids),
            )
            lines: dict[int, list[PayrollDetail]] = defaultdict(list)
            for d in fetchall(cur):
                lines[int(d["gaji_id"])].append(
                    PayrollDetail(
                        kind=ComponentKind(d["jenis_komponen"]),
                        description=d["deskripsi"],
                        amount=int(d["jumlah"]),
                        detail_id=int(d["detail_gaji_id"]),
                    )
                )

        return [
            PayrollRecord(
                record_id=int(h["gaji_id"]),
                employee_id=int(h["karyawan_id"]),
                period=h["periode"],
                period_type=PeriodType(h["tipe_periode"]),
                period_start=h["periode_mulai"],
                period_end=h["periode_selesai"],
                payment_date=h.get("tanggal_pembayaran"),
                status=PayrollStatus(h["status"]),
                needs_review=bool(h.get("needs_review")),
                details=tuple(lines[int(h["gaji_id"])]),
            )
            for h in headers
        ]
