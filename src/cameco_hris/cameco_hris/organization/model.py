from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str
    code: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    manager_id: Optional[int] = None
    budget: Optional[int] = None
    is_active: bool = True

    def as_dict(self) -> dict:
        return {
            "id": self.department_id,
            "name": self.name,
            "code": self.code,
            "description": self.description,
            "parent_id": self.parent_id,
            "manager_id": self.manager_id,
            "budget": self.budget,
            "is_active": self.is_active,
        }


@dataclass(frozen=True)
class DepartmentInput:
    """Validated create/update payload."""

    name: str
    code: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    manager_id: Optional[int] = None
    budget: Optional[int] = None
    is_active: bool = True
