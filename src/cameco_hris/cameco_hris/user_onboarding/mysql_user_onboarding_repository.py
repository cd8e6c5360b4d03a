from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.json_utils import dump_json_field, load_json_field
from ..core.enums import OnboardingStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchone
from .model import UserOnboarding
from .repository import UserOnboardingRepository

_COLUMNS = "onboarding_id, user_id, status, checklist_json, started_at, completed_at, skipped_at, skipped_by"


def _row_to_onboarding(r: dict) -> UserOnboarding:
    return UserOnboarding(
        onboarding_id=int(r["onboarding_id"]),
        user_id=int(r["user_id"]),
        status=OnboardingStatus(r["status"]),
        checklist=load_json_field(r.get("checklist_json"), []),
        started_at=r.get("started_at"),
        completed_at=r.get("completed_at"),
        skipped_at=r.get("skipped_at"),
        skipped_by=as_optional_int(r.get("skipped_by")),
    )


class MySQLUserOnboardingRepository(UserOnboardingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, cur, user_id: int) -> Optional[UserOnboarding]:
        cur.execute(f"SELECT {_COLUMNS} FROM user_onboardings WHERE user_id=%s", (int(user_id),))
        r = fetchone(cur)
        return _row_to_onboarding(r) if r else None

    def find_by_user(self, user_id: int) -> Optional[UserOnboarding]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, user_id)

    def create_or_update_by_user(
        self,
        user_id: int,
        *,
        status: OnboardingStatus,
        started_at: datetime,
        checklist: Optional[list[dict]] = None,
    ) -> UserOnboarding:
        with db_cursor(self._conn_factory) as (_, cur):
            if checklist is None:
                cur.execute(
                    """
                    INSERT INTO user_onboardings(user_id, status, started_at)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE status=VALUES(status), started_at=VALUES(started_at)
                    """,
                    (int(user_id), status.value, started_at),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO user_onboardings(user_id, status, started_at, checklist_json)
                    VALUES(%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE status=VALUES(status), started_at=VALUES(started_at),
                        checklist_json=VALUES(checklist_json)
                    """,
                    (int(user_id), status.value, started_at, dump_json_field(checklist)),
                )
            return self._select(cur, user_id)

    def mark_complete(self, user_id: int, *, completed_at: datetime) -> Optional[UserOnboarding]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE user_onboardings SET status=%s, completed_at=%s WHERE user_id=%s",
                (OnboardingStatus.COMPLETED.value, completed_at, int(user_id)),
            )
            return self._select(cur, user_id)

    def mark_skipped(self, user_id: int, *, skipped_at: datetime, skipped_by: Optional[int]) -> UserOnboarding:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_onboardings(user_id, status, skipped_at, skipped_by)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), skipped_at=VALUES(skipped_at),
                    skipped_by=VALUES(skipped_by)
                """,
                (int(user_id), OnboardingStatus.SKIPPED.value, skipped_at, skipped_by),
            )
            return self._select(cur, user_id)
