from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AccountStatus, Role


@dataclass(frozen=True)
class User:
    """Domain entity: a login account.

    Note: plain data object (no DB access code).
    """

    user_id: int
    name: str
    username: str
    email: str
    password_hash: str
    role: Role
    status: AccountStatus = AccountStatus.ACTIVE
    email_verified_at: Optional[datetime] = None
    employee_id: Optional[int] = None
    department_id: Optional[int] = None
    profile_completion_skipped: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin

    @property
    def has_employee_record(self) -> bool:
        return self.employee_id is not None


@dataclass(frozen=True)
class Profile:
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
