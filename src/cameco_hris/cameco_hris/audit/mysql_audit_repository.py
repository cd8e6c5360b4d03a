from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.json_utils import dump_json_field, load_json_field
from ..core.enums import AuditSeverity
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchall
from .model import AuditEntry, AuditRecord
from .repository import AuditLogRepository


def insert_audit_log(cur, record: AuditRecord) -> int:
    """Write one security_audit_logs row on an open cursor; the caller commits."""
    cur.execute(
        """
        INSERT INTO security_audit_logs(user_id, action, description, severity, module, metadata_json)
        VALUES(%s,%s,%s,%s,%s,%s)
        """,
        (
            record.user_id,
            record.action,
            record.description,
            record.severity.value,
            record.module,
            dump_json_field(dict(record.metadata)),
        ),
    )
    return int(cur.lastrowid)


class MySQLAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def log(
        self,
        *,
        user_id: Optional[int],
        action: str,
        description: str,
        severity: AuditSeverity = AuditSeverity.MEDIUM,
        module: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> int:
        record = AuditRecord(
            user_id=user_id,
            action=action,
            description=description,
            severity=severity,
            module=module,
            metadata=dict(metadata or {}),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            return insert_audit_log(cur, record)

    def record_skip(
        self,
        *,
        user_id: int,
        user_onboarding_id: Optional[int],
        reason: Optional[str],
        skipped_at: datetime,
        scope: str = "user",
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO onboarding_skips(user_id, user_onboarding_id, scope, reason, skipped_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), user_onboarding_id, scope, reason, skipped_at),
            )
            return int(cur.lastrowid)

    def list_recent(self, *, action: Optional[str] = None, limit: int = 50) -> Sequence[AuditEntry]:
        sql = """
            SELECT log_id, user_id, action, description, severity, module, metadata_json, created_at
            FROM security_audit_logs
        """
        params: list[object] = []
        if action:
            sql += " WHERE action=%s"
            params.append(action)
        sql += " ORDER BY log_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                AuditEntry(
                    log_id=int(r["log_id"]),
                    user_id=as_optional_int(r.get("user_id")),
                    action=r["action"],
                    description=r["description"],
                    severity=AuditSeverity(r["severity"]),
                    module=r.get("module"),
                    created_at=r["created_at"],
                    metadata=load_json_field(r.get("metadata_json"), {}),
                )
                for r in fetchall(cur)
            ]
