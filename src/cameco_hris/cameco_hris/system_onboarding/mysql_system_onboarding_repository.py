from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..audit.model import AuditRecord
from ..audit.mysql_audit_repository import insert_audit_log
from ..common.json_utils import dump_json_field, load_json_field
from ..core.enums import OnboardingStatus, Role
from ..core.exceptions import InvalidTransitionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..settings.mysql_settings_repository import upsert_settings
from .model import SystemOnboarding
from .repository import SystemOnboardingRepository

_COLUMNS = """
    onboarding_id, status, current_owner_role, metadata_json, created_by,
    started_at, completed_at, updated_at
"""


def _row_to_onboarding(r: dict) -> SystemOnboarding:
    return SystemOnboarding(
        onboarding_id=int(r["onboarding_id"]),
        status=OnboardingStatus(r["status"]),
        current_owner_role=Role(r["current_owner_role"]),
        created_by=int(r["created_by"]),
        started_at=r["started_at"],
        metadata=load_json_field(r.get("metadata_json"), {}),
        completed_at=r.get("completed_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLSystemOnboardingRepository(SystemOnboardingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def initialize(
        self,
        *,
        status: OnboardingStatus,
        current_owner_role: Role,
        metadata: Mapping[str, Any],
        created_by: int,
        started_at: datetime,
        settings: Mapping[str, Optional[str]],
        audit: AuditRecord,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # uq_system_onboardings_singleton rejects a second row
                cur.execute(
                    """
                    INSERT INTO system_onboardings(status, current_owner_role, metadata_json, created_by, started_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (status.value, current_owner_role.value, dump_json_field(dict(metadata)), int(created_by), started_at),
                )
                onboarding_id = int(cur.lastrowid)
                upsert_settings(cur, settings, int(created_by))
                insert_audit_log(cur, audit)
                return onboarding_id
        except IntegrityError as e:
            if e.errno != errorcode.ER_DUP_ENTRY:
                raise
            raise InvalidTransitionError("System onboarding has already been initialized") from e

    def get_by_id(self, onboarding_id: int) -> Optional[SystemOnboarding]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM system_onboardings WHERE onboarding_id=%s", (int(onboarding_id),))
            r = fetchone(cur)
            return _row_to_onboarding(r) if r else None

    def get_latest(self) -> Optional[SystemOnboarding]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM system_onboardings ORDER BY onboarding_id DESC LIMIT 1")
            r = fetchone(cur)
            return _row_to_onboarding(r) if r else None

    def update(
        self,
        onboarding_id: int,
        *,
        status: Optional[OnboardingStatus] = None,
        current_owner_role: Optional[Role] = None,
        completed_at: Optional[datetime] = None,
    ) -> bool:
        sets = ["updated_at=NOW()"]
        params: list[object] = []
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        if current_owner_role is not None:
            sets.append("current_owner_role=%s")
            params.append(current_owner_role.value)
        if completed_at is not None:
            sets.append("completed_at=%s")
            params.append(completed_at)
        params.append(int(onboarding_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE system_onboardings SET {', '.join(sets)} WHERE onboarding_id=%s", tuple(params))
            return cur.rowcount > 0
