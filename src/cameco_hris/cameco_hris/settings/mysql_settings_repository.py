from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import SettingsRepository


def upsert_settings(cur, values: Mapping[str, Optional[str]], updated_by: Optional[int] = None) -> None:
    """Upsert settings on an open cursor; the caller commits."""
    if not values:
        return
    cur.executemany(
        """
        INSERT INTO system_settings(setting_key, setting_value, updated_by)
        VALUES(%s,%s,%s)
        ON DUPLICATE KEY UPDATE setting_value=VALUES(setting_value), updated_by=VALUES(updated_by)
        """,
        [(k, v, updated_by) for k, v in values.items()],
    )


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_many(self, keys: Sequence[str]) -> dict[str, Optional[str]]:
        out: dict[str, Optional[str]] = {k: None for k in keys}
        if not keys:
            return out
        placeholders = ",".join(["%s"] * len(keys))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT setting_key, setting_value FROM system_settings WHERE setting_key IN ({placeholders})",
                tuple(keys),
            )
            for r in fetchall(cur):
                out[r["setting_key"]] = r["setting_value"]
        return out

    def upsert_many(self, values: Mapping[str, Optional[str]], *, updated_by: Optional[int] = None) -> None:
        if not values:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            upsert_settings(cur, values, updated_by)
