from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Profile
from .repository import ProfileRepository


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: int) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, first_name, last_name, contact_number, address, emergency_contact
                FROM profiles
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Profile(
                user_id=int(r["user_id"]),
                first_name=r.get("first_name"),
                last_name=r.get("last_name"),
                contact_number=r.get("contact_number"),
                address=r.get("address"),
                emergency_contact=r.get("emergency_contact"),
            )
