from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_optional_int, db_cursor, fetchall, fetchone
from .model import Department, DepartmentInput
from .repository import DepartmentRepository

_COLUMNS = "department_id, name, code, description, parent_id, manager_id, budget, is_active"


def _row_to_department(r: dict) -> Department:
    return Department(
        department_id=int(r["department_id"]),
        name=r["name"],
        code=r["code"],
        description=r.get("description"),
        parent_id=as_optional_int(r.get("parent_id")),
        manager_id=as_optional_int(r.get("manager_id")),
        budget=as_optional_int(r.get("budget")),
        is_active=as_bool(r.get("is_active"), True),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments ORDER BY name")
            return [_row_to_department(r) for r in fetchall(cur)]

    def _get_by(self, column: str, value: object) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM departments WHERE {column}=%s", (value,))
            r = fetchone(cur)
            return _row_to_department(r) if r else None

    def get_by_id(self, department_id: int) -> Optional[Department]:
        return self._get_by("department_id", int(department_id))

    def get_by_code(self, code: str) -> Optional[Department]:
        return self._get_by("code", code)

    def get_by_name(self, name: str) -> Optional[Department]:
        return self._get_by("name", name)

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM departments")
            return int(fetchone(cur)["n"])

    def count_children(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM departments WHERE parent_id=%s", (int(department_id),))
            return int(fetchone(cur)["n"])

    def count_members(self, department_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT (SELECT COUNT(*) FROM users WHERE department_id=%s)
                     + (SELECT COUNT(*) FROM employees WHERE department_id=%s) AS n
                """,
                (int(department_id), int(department_id)),
            )
            return int(fetchone(cur)["n"])

    def create(self, data: DepartmentInput) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO departments(name, code, description, parent_id, manager_id, budget, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    data.name,
                    data.code,
                    data.description,
                    data.parent_id,
                    data.manager_id,
                    data.budget,
                    1 if data.is_active else 0,
                ),
            )
            return int(cur.lastrowid)

    def update(self, department_id: int, data: DepartmentInput) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE departments
                SET name=%s, code=%s, description=%s, parent_id=%s, manager_id=%s, budget=%s, is_active=%s
                WHERE department_id=%s
                """,
                (
                    data.name,
                    data.code,
                    data.description,
                    data.parent_id,
                    data.manager_id,
                    data.budget,
                    1 if data.is_active else 0,
                    int(department_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, department_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
            return cur.rowcount > 0
