from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Sequence

from ..audit.repository import AuditLogRepository
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import DEFAULT_DEPARTMENTS
from ..core.enums import AuditSeverity, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Department, DepartmentInput
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)

MANAGE_ROLES = (Role.SUPER_ADMIN, Role.OFFICE_ADMIN)


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def _as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def parse_department_input(payload: Mapping[str, Any]) -> DepartmentInput:
    name = require_non_empty(payload.get("name"), "Department name")
    require_max_length(name, "Department name", 255)
    code = require_non_empty(payload.get("code"), "Department code").upper()
    require_max_length(code, "Department code", 50)

    budget = _optional_int(payload.get("budget"), "Budget")
    if budget is not None and budget < 0:
        raise ValidationError("Budget must not be negative")

    return DepartmentInput(
        name=name,
        code=code,
        description=(str(payload.get("description") or "").strip() or None),
        parent_id=_optional_int(payload.get("parent_id"), "Parent department"),
        manager_id=_optional_int(payload.get("manager_id"), "Manager"),
        budget=budget,
        is_active=_as_bool(payload.get("is_active"), True),
    )


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, audit: AuditLogRepository):
        self._departments = departments
        self._audit = audit

    @staticmethod
    def _require_manager(current_role: Role) -> None:
        if current_role not in MANAGE_ROLES:
            raise AuthorizationError("You do not have permission to manage departments")

    def list_all(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get(self, department_id: int) -> Department:
        dept = self._departments.get_by_id(int(department_id))
        if not dept:
            raise NotFoundError("Department not found")
        return dept

    def tree(self) -> list[dict]:
        """Roots with nested children; each node carries its depth."""
        departments = list(self._departments.list_all())
        by_parent: dict[Optional[int], list[Department]] = {}
        for d in departments:
            by_parent.setdefault(d.parent_id, []).append(d)

        def build(d: Department, depth: int) -> dict:
            return {
                "id": d.department_id,
                "name": d.name,
                "code": d.code,
                "is_active": d.is_active,
                "depth": depth,
                "children": [build(c, depth + 1) for c in by_parent.get(d.department_id, [])],
            }

        known = {d.department_id for d in departments}
        roots = [d for d in departments if d.parent_id is None or d.parent_id not in known]
        return [build(d, 0) for d in roots]

    def stats(self) -> dict:
        departments = list(self._departments.list_all())
        return {
            "total": len(departments),
            "active": sum(1 for d in departments if d.is_active),
            "inactive": sum(1 for d in departments if not d.is_active),
            "with_manager": sum(1 for d in departments if d.manager_id is not None),
            "total_budget": sum(d.budget or 0 for d in departments),
        }

    def _check_unique(self, data: DepartmentInput, *, ignore_id: Optional[int] = None) -> None:
        same_name = self._departments.get_by_name(data.name)
        if same_name and same_name.department_id != ignore_id:
            raise ValidationError("Department name already exists")
        same_code = self._departments.get_by_code(data.code)
        if same_code and same_code.department_id != ignore_id:
            raise ValidationError("Department code already exists")

    def _check_parent(self, data: DepartmentInput, *, department_id: Optional[int] = None) -> None:
        if data.parent_id is None:
            return
        if department_id is not None and data.parent_id == department_id:
            raise ValidationError("A department cannot be its own parent")
        if not self._departments.get_by_id(data.parent_id):
            raise ValidationError("Parent department does not exist")
        if department_id is None:
            return

        # Walk up from the new parent; meeting the department itself means a cycle.
        parents = {d.department_id: d.parent_id for d in self._departments.list_all()}
        cursor: Optional[int] = data.parent_id
        seen: set[int] = set()
        while cursor is not None and cursor not in seen:
            if cursor == department_id:
                raise ValidationError("A department cannot be moved under its own sub-department")
            seen.add(cursor)
            cursor = parents.get(cursor)

    def create(self, *, current_role: Role, user_id: int, payload: Mapping[str, Any]) -> Department:
        self._require_manager(current_role)
        data = parse_department_input(payload)
        self._check_unique(data)
        self._check_parent(data)

        department_id = self._departments.create(data)
        self._audit.log(
            user_id=int(user_id),
            action="department_created",
            description=f"Created department: {data.name} ({data.code})",
            severity=AuditSeverity.HIGH,
            module="Department Management",
            metadata={"department_id": department_id, "department_name": data.name},
        )
        return self.get(department_id)

    def update(self, *, current_role: Role, user_id: int, department_id: int, payload: Mapping[str, Any]) -> Department:
        self._require_manager(current_role)
        existing = self.get(department_id)
        data = parse_department_input(payload)
        self._check_unique(data, ignore_id=existing.department_id)
        self._check_parent(data, department_id=existing.department_id)

        if not self._departments.update(existing.department_id, data):
            raise ValidationError("Failed to update department")
        self._audit.log(
            user_id=int(user_id),
            action="department_updated",
            description=f"Updated department: {data.name} ({data.code})",
            severity=AuditSeverity.MEDIUM,
            module="Department Management",
            metadata={"department_id": existing.department_id},
        )
        return self.get(existing.department_id)

    def delete(self, *, current_role: Role, user_id: int, department_id: int) -> None:
        self._require_manager(current_role)
        existing = self.get(department_id)
        if self._departments.count_children(existing.department_id) > 0:
            raise ValidationError("Cannot delete department with sub-departments")
        if self._departments.count_members(existing.department_id) > 0:
            raise ValidationError("Cannot delete department with assigned employees")

        if not self._departments.delete(existing.department_id):
            raise ValidationError("Failed to delete department")
        self._audit.log(
            user_id=int(user_id),
            action="department_deleted",
            description=f"Deleted department: {existing.name}",
            severity=AuditSeverity.HIGH,
            module="Department Management",
            metadata={"department_id": existing.department_id},
        )

    @staticmethod
    def _custom_seed_rows(departments: Any) -> list[dict]:
        if isinstance(departments, (str, bytes)):
            try:
                departments = json.loads(departments)
            except ValueError:
                raise ValidationError("Departments must be a JSON list")
        if not isinstance(departments, list):
            raise ValidationError("Departments must be a list")
        # Custom seeds are flat: no parent resolution.
        return [
            {"name": d.get("name", ""), "code": d.get("code", ""), "description": d.get("description")}
            for d in departments
            if isinstance(d, dict)
        ]

    def seed_defaults(self, *, current_role: Role, user_id: int, departments: Any = None) -> list[Department]:
        """Create the default Philippine company structure, or a caller-supplied flat list."""
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only Super Admin can seed departments")
        if self._departments.count() > 0:
            raise ValidationError("Departments already exist. Delete existing departments to seed again.")

        if departments:
            rows = self._custom_seed_rows(departments)
            if not rows:
                raise ValidationError("Departments must contain at least one department object")
        else:
            rows = [dict(d) for d in DEFAULT_DEPARTMENTS]

        inputs = [
            (parse_department_input({**r, "parent_id": None}), r.get("parent_code"))
            for r in rows
        ]
        codes = [data.code for data, _ in inputs]
        if len(set(codes)) != len(codes):
            raise ValidationError("Department codes must be unique")
        # departments.name collates case-insensitively
        names = [data.name.casefold() for data, _ in inputs]
        if len(set(names)) != len(names):
            raise ValidationError("Department names must be unique")

        created: list[Department] = []
        ids_by_code: dict[str, int] = {}
        for data, parent_code in inputs:
            parent_id = ids_by_code.get(parent_code) if parent_code else None
            department_id = self._departments.create(
                DepartmentInput(
                    name=data.name,
                    code=data.code,
                    description=data.description,
                    parent_id=parent_id,
                    is_active=True,
                )
            )
            ids_by_code[data.code] = department_id
            created.append(self.get(department_id))

        self._audit.log(
            user_id=int(user_id),
            action="seed_departments",
            description="Seeded company department structure",
            severity=AuditSeverity.HIGH,
            module="System Onboarding",
            metadata={"total_departments": len(created), "department_codes": codes},
        )
        logger.info("Seeded %d departments", len(created), extra={"user_id": user_id})
        return created
