from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class EmployeeInput:
    """Validated profile-completion payload for an admin account."""

    lastname: str
    firstname: str
    middlename: Optional[str]
    department_id: int
    position: str
    employment_type: str
    date_employed: date
    date_of_birth: date
    gender: str
    civil_status: str
    address: str
    contact_number: str
    email_personal: Optional[str]
    place_of_birth: str
    emergency_contact_name: str
    emergency_contact_relationship: str
    emergency_contact_number: str


@dataclass(frozen=True)
class Employee:
    employee_id: int
    user_id: Optional[int]
    lastname: str
    firstname: str
    department_id: int
    position: str
    employment_type: str
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()

    def as_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "user_id": self.user_id,
            "full_name": self.full_name,
            "department_id": self.department_id,
            "position": self.position,
            "employment_type": self.employment_type,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
