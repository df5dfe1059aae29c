from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, DayKind
from ..core.exceptions import PeriodClosedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceDay
from .repository import AttendanceRepository

_COLUMNS = """
    karyawan_id, tanggal_absensi, jam_scan_masuk, jam_scan_pulang, status, jenis_hari,
    durasi_lembur_menit, upah_lembur, premi, uang_makan, hadir_6_hari_periode, is_gap, catatan
"""


def _to_day(r: dict) -> AttendanceDay:
    return AttendanceDay(
        employee_id=int(r["karyawan_id"]),
        work_date=r["tanggal_absensi"],
        scan_in=normalize_mysql_time(r.get("jam_scan_masuk")),
        scan_out=normalize_mysql_time(r.get("jam_scan_pulang")),
        status=AttendanceStatus(r["status"]),
        day_kind=DayKind(r["jenis_hari"]),
        overtime_minutes=int(r.get("durasi_lembur_menit") or 0),
        overtime_pay=int(r.get("upah_lembur") or 0),
        premium=int(r.get("premi") or 0),
        meal_allowance=int(r.get("uang_makan") or 0),
        six_day_streak=bool(r.get("hadir_6_hari_periode")),
        is_gap=bool(r.get("is_gap")),
        warnings=tuple(json.loads(r["catatan"])) if r.get("catatan") else (),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: int, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM absensi WHERE karyawan_id=%s AND tanggal_absensi=%s",
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_day(r) if r else None

    def save(self, day: AttendanceDay) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM periode_tertutup WHERE %s BETWEEN tanggal_mulai AND tanggal_selesai",
                (day.work_date,),
            )
            if fetch_count(cur):
                raise PeriodClosedError(
                    "Periode sudah ditutup, absensi tidak dapat diubah",
                    karyawan_id=day.employee_id,
                    tanggal=day.work_date,
                )
            cur.execute(
                f"""
                REPLACE INTO absensi({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    day.employee_id,
                    day.work_date,
                    day.scan_in,
                    day.scan_out,
                    day.status.value,
                    day.day_kind.value,
                    day.overtime_minutes,
                    day.overtime_pay,
                    day.premium,
                    day.meal_allowance,
                    int(day.six_day_streak),
                    int(day.is_gap),
                    json.dumps(list(day.warnings)) if day.warnings else None,
                ),
            )

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM absensi
                WHERE karyawan_id=%s AND tanggal_absensi BETWEEN %s AND %s
                ORDER BY tanggal_absensi ASC
                """,
                (int(employee_id), start, end),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def close_period(self, *, start: date, end: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO periode_tertutup(tanggal_mulai, tanggal_selesai) VALUES(%s,%s)",
                (start, end),
            )

    def is_closed(self, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM periode_tertutup WHERE %s BETWEEN tanggal_mulai AND tanggal_selesai",
                (work_date,),
            )
            return fetch_count(cur) > 0
