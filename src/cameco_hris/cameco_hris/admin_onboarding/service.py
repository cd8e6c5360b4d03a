"""Profile completion for admin accounts.

Admins created during system setup have a login but no employee record. Until
they link one (or skip), the UI keeps sending them to the profile-completion page.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_email,
    require_choice,
    require_iso_date,
    require_max_length,
    require_non_empty,
    require_phone,
)
from ..core.constants import CIVIL_STATUSES, EMPLOYMENT_TYPES, GENDERS
from ..core.exceptions import NotFoundError, ValidationError
from ..organization.repository import DepartmentRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import Employee, EmployeeInput
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "personal": [
        "lastname",
        "firstname",
        "middlename",
        "date_of_birth",
        "gender",
        "civil_status",
        "address",
        "contact_number",
        "email_personal",
        "place_of_birth",
    ],
    "employment": ["department_id", "position", "employment_type", "date_employed"],
    "emergency": ["emergency_contact_name", "emergency_contact_relationship", "emergency_contact_number"],
}


def _required_text(data: Mapping[str, Any], key: str, label: str, max_len: int = 255) -> str:
    value = require_non_empty(data.get(key), label)
    require_max_length(value, label, max_len)
    return value


def _required_phone(data: Mapping[str, Any], key: str, label: str) -> str:
    value = require_phone(data.get(key), label)
    require_max_length(value, label, 50)
    return value


class AdminOnboardingService:
    def __init__(
        self,
        users: UserRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
    ):
        self._users = users
        self._employees = employees
        self._departments = departments

    @staticmethod
    def requires_onboarding(user: User) -> bool:
        return user.is_admin and not user.has_employee_record and not user.profile_completion_skipped

    @staticmethod
    def required_fields() -> dict[str, list[str]]:
        return {group: list(fields) for group, fields in REQUIRED_FIELDS.items()}

    def validate(self, data: Mapping[str, Any], *, today: Optional[date] = None) -> EmployeeInput:
        today = today or now_local().date()

        middlename = str(data.get("middlename") or "").strip() or None
        require_max_length(middlename, "Middle name", 255)

        try:
            department_id = int(data.get("department_id"))
        except (TypeError, ValueError):
            raise ValidationError("Department is required")
        if not self._departments.get_by_id(department_id):
            raise ValidationError("Selected department does not exist")

        date_of_birth = require_iso_date(data.get("date_of_birth"), "Date of birth")
        if date_of_birth >= today:
            raise ValidationError("Date of birth must be before today")

        email_personal = optional_email(data.get("email_personal"), "Personal email")
        require_max_length(email_personal, "Personal email", 255)

        return EmployeeInput(
            lastname=_required_text(data, "lastname", "Last name"),
            firstname=_required_text(data, "firstname", "First name"),
            middlename=middlename,
            department_id=department_id,
            position=_required_text(data, "position", "Position"),
            employment_type=require_choice(data.get("employment_type"), "Employment type", EMPLOYMENT_TYPES),
            date_employed=require_iso_date(data.get("date_employed"), "Date employed"),
            date_of_birth=date_of_birth,
            gender=require_choice(data.get("gender"), "Gender", GENDERS),
            civil_status=require_choice(data.get("civil_status"), "Civil status", CIVIL_STATUSES),
            address=require_non_empty(data.get("address"), "Address"),
            contact_number=_required_phone(data, "contact_number", "Contact number"),
            email_personal=email_personal,
            place_of_birth=_required_text(data, "place_of_birth", "Place of birth"),
            emergency_contact_name=_required_text(data, "emergency_contact_name", "Emergency contact name"),
            emergency_contact_relationship=_required_text(
                data, "emergency_contact_relationship", "Emergency contact relationship"
            ),
            emergency_contact_number=_required_phone(data, "emergency_contact_number", "Emergency contact number"),
        )

    def create_employee_for_admin(self, user: User, data: Mapping[str, Any], *, today: Optional[date] = None) -> Employee:
        if user.has_employee_record:
            raise ValidationError("This account is already linked to an employee record")

        employee_input = self.validate(data, today=today)
        employee_id = self._employees.create_for_user(user.user_id, employee_input)
        logger.info("Linked employee %s to admin account", employee_id, extra={"user_id": user.user_id})

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee record was not created")
        return employee

    def progress(self, user: User) -> dict:
        if not user.is_admin:
            return {"status": "not_applicable"}

        employee = self._employees.get_by_id(user.employee_id) if user.employee_id is not None else None
        if employee:
            return {
                "status": "completed",
                "employee": employee.as_dict(),
                "completion_date": employee.created_at.isoformat() if employee.created_at else None,
            }

        return {
            "status": "pending",
            "required_fields": self.required_fields(),
            "message": "Complete your employee profile to access the system",
        }

    def skip(self, user: User) -> None:
        if not self._users.mark_profile_completion_skipped(user.user_id):
            raise NotFoundError("User not found")
        logger.info("Admin skipped profile completion", extra={"user_id": user.user_id})
