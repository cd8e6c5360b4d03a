from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, DepartmentInput


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Department]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Department]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def count_children(self, department_id: int) -> int:
        raise NotImplementedError

    def count_members(self, department_id: int) -> int:
        """Users and employee records that point at the department."""

        raise NotImplementedError

    def create(self, data: DepartmentInput) -> int:
        raise NotImplementedError

    def update(self, department_id: int, data: DepartmentInput) -> bool:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError
