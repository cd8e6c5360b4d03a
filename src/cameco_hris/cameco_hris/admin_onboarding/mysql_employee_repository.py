from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchone
from .model import Employee, EmployeeInput
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, user_id, lastname, firstname, department_id,
                       position, employment_type, created_at
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Employee(
                employee_id=int(row["employee_id"]),
                user_id=as_optional_int(row.get("user_id")),
                lastname=row["lastname"],
                firstname=row["firstname"],
                department_id=int(row["department_id"]),
                position=row["position"],
                employment_type=row["employment_type"],
                created_at=row.get("created_at"),
            )

    def create_for_user(self, user_id: int, data: EmployeeInput) -> int:
        # Single cursor: both statements commit or roll back together.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees (
                    user_id, lastname, firstname, middlename, department_id, position,
                    employment_type, date_employed, date_of_birth, gender, civil_status,
                    address, contact_number, email_personal, place_of_birth,
                    emergency_contact_name, emergency_contact_relationship,
                    emergency_contact_number, created_by, updated_by
                ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    int(user_id),
                    data.lastname,
                    data.firstname,
                    data.middlename,
                    data.department_id,
                    data.position,
                    data.employment_type,
                    data.date_employed,
                    data.date_of_birth,
                    data.gender,
                    data.civil_status,
                    data.address,
                    data.contact_number,
                    data.email_personal,
                    data.place_of_birth,
                    data.emergency_contact_name,
                    data.emergency_contact_relationship,
                    data.emergency_contact_number,
                    int(user_id),
                    int(user_id),
                ),
            )
            employee_id = int(cur.lastrowid)
            cur.execute(
                "UPDATE users SET employee_id=%s, department_id=%s WHERE user_id=%s",
                (employee_id, data.department_id, int(user_id)),
            )
            return employee_id
