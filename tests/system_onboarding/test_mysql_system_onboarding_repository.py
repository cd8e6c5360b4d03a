from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError, OperationalError

from src.cameco_hris.cameco_hris.audit.model import AuditRecord
from src.cameco_hris.cameco_hris.core.enums import AuditSeverity, OnboardingStatus, Role
from src.cameco_hris.cameco_hris.core.exceptions import InvalidTransitionError
from src.cameco_hris.cameco_hris.system_onboarding.mysql_system_onboarding_repository import (
    MySQLSystemOnboardingRepository,
)
from tests.fakes import NOW


class ScriptedCursor:
    """Records statements; raises the error mapped to the first table name it sees."""

    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 7

    def _maybe_fail(self, sql: str):
        for table, error in self._conn.failures.items():
            if table in sql:
                raise error

    def execute(self, sql, params=None):
        self._maybe_fail(sql)
        self._conn.statements.append(" ".join(sql.split()))

    def executemany(self, sql, rows):
        self._maybe_fail(sql)
        self._conn.statements.append(" ".join(sql.split()))
        self._conn.batches.append(list(rows))

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, failures=None):
        self.failures = dict(failures or {})
        self.statements: list[str] = []
        self.batches: list[list] = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return ScriptedCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class ScriptedFactory:
    def __init__(self, conn: ScriptedConnection):
        self._conn = conn

    def connect(self, *, with_database: bool = True):
        return self._conn


def _initialize(repo):
    return repo.initialize(
        status=OnboardingStatus.NOT_STARTED,
        current_owner_role=Role.SUPER_ADMIN,
        metadata={"company_name": "Cathay Metal Corporation"},
        created_by=1,
        started_at=NOW,
        settings={"company_name": "Cathay Metal Corporation", "currency": "PHP"},
        audit=AuditRecord(
            user_id=1,
            action="system_onboarding_initialize",
            description="Initialized system",
            severity=AuditSeverity.HIGH,
            module="System Onboarding",
        ),
    )


def test_initialize_writes_row_settings_and_audit_in_one_commit():
    conn = ScriptedConnection()
    onboarding_id = _initialize(MySQLSystemOnboardingRepository(ScriptedFactory(conn)))

    assert onboarding_id == 7
    assert [s.split("(")[0] for s in conn.statements] == [
        "INSERT INTO system_onboardings",
        "INSERT INTO system_settings",
        "INSERT INTO security_audit_logs",
    ]
    assert conn.batches == [[("company_name", "Cathay Metal Corporation", 1), ("currency", "PHP", 1)]]
    assert conn.committed and not conn.rolled_back


def test_failed_audit_insert_rolls_back_the_workflow_row():
    conn = ScriptedConnection({"security_audit_logs": OperationalError(msg="table is read only")})
    with pytest.raises(OperationalError):
        _initialize(MySQLSystemOnboardingRepository(ScriptedFactory(conn)))
    assert conn.rolled_back
    assert not conn.committed


def test_duplicate_singleton_maps_to_invalid_transition():
    conn = ScriptedConnection(
        {"system_onboardings": IntegrityError(msg="Duplicate entry '1'", errno=errorcode.ER_DUP_ENTRY)}
    )
    with pytest.raises(InvalidTransitionError):
        _initialize(MySQLSystemOnboardingRepository(ScriptedFactory(conn)))
    assert conn.rolled_back
    assert conn.statements == []


def test_other_integrity_errors_propagate():
    conn = ScriptedConnection(
        {"system_onboardings": IntegrityError(msg="Column cannot be null", errno=errorcode.ER_BAD_NULL_ERROR)}
    )
    with pytest.raises(IntegrityError):
        _initialize(MySQLSystemOnboardingRepository(ScriptedFactory(conn)))
