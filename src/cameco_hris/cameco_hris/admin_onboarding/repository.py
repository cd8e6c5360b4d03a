from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee, EmployeeInput


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def create_for_user(self, user_id: int, data: EmployeeInput) -> int:
        """Insert the employee and link it on the user account in one transaction."""

        raise NotImplementedError
