from __future__ import annotations

from datetime import datetime
from typing import Iterator, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import POLICY_FIELDS, WIRE_NAMES, PayPolicyVersion
from .repository import PayPolicyRepository

_COLUMNS = ", ".join(["setting_id", *(WIRE_NAMES[f] for f in POLICY_FIELDS), "is_active", "created_at", "updated_at"])


def _to_version(r: dict) -> PayPolicyVersion:
    return PayPolicyVersion(
        setting_id=int(r["setting_id"]),
        is_active=bool(r["is_active"]),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
        **{name: int(r[WIRE_NAMES[name]]) for name in POLICY_FIELDS},
    )


class MySQLPayPolicyRepository(PayPolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, page_size: int = 50):
        self._conn_factory = conn_factory
        self._page_size = int(page_size)

    def add_and_activate(self, *, values: Mapping[str, int], at: datetime) -> PayPolicyVersion:
        columns = [WIRE_NAMES[name] for name in POLICY_FIELDS]
        placeholders = ", ".join(["%s"] * (len(columns) + 3))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE setting_gaji SET is_active=0, updated_at=%s WHERE is_active=1", (at,))
            cur.execute(
                f"""
                INSERT INTO setting_gaji({", ".join(columns)}, is_active, created_at, updated_at)
                VALUES({placeholders})
                """,
                (*(int(values[name]) for name in POLICY_FIELDS), 1, at, at),
            )
            setting_id = int(cur.lastrowid)
        return PayPolicyVersion(setting_id=setting_id, is_active=True, created_at=at, updated_at=at, **values)

    def activate(self, setting_id: int, *, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_id, is_active FROM setting_gaji WHERE setting_id=%s FOR UPDATE", (int(setting_id),))
            row = fetchone(cur)
            if not row:
                return False
            if row["is_active"]:
                return True
            cur.execute(
                "UPDATE setting_gaji SET is_active=0, updated_at=%s WHERE is_active=1 AND setting_id<>%s",
                (at, int(setting_id)),
            )
            cur.execute(
                "UPDATE setting_gaji SET is_active=1, updated_at=%s WHERE setting_id=%s",
                (at, int(setting_id)),
            )
            return True

    def get(self, setting_id: int) -> Optional[PayPolicyVersion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM setting_gaji WHERE setting_id=%s", (int(setting_id),))
            r = fetchone(cur)
            return _to_version(r) if r else None

    def get_active(self) -> Optional[PayPolicyVersion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM setting_gaji WHERE is_active=1 LIMIT 1")
            r = fetchone(cur)
            return _to_version(r) if r else None

    def iter_newest_first(self) -> Iterator[PayPolicyVersion]:
        # Keyset pagination so long histories are not loaded at once.
        cursor_key: Optional[tuple[datetime, int]] = None
        while True:
            with db_cursor(self._conn_factory) as (_, cur):
                if cursor_key is None:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS} FROM setting_gaji
                        ORDER BY created_at DESC, setting_id DESC
                        LIMIT %s
                        """,
                        (self._page_size,),
                    )
                else:
                    created_at, setting_id = cursor_key
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS} FROM setting_gaji
                        WHERE created_at < %s OR (created_at = %s AND setting_id < %s)
                        ORDER BY created_at DESC, setting_id DESC
                        LIMIT %s
                        """,
                        (created_at, created_at, setting_id, self._page_size),
                    )
                rows = fetchall(cur)

            for r in rows:
                yield _to_version(r)
            if len(rows) < self._page_size:
                return
            last = rows[-1]
            cursor_key = (last["created_at"], int(last["setting_id"]))
