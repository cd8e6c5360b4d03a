from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for permission gates."""

    SUPER_ADMIN = "super_admin"
    OFFICE_ADMIN = "office_admin"
    HR_MANAGER = "hr_manager"
    HR_STAFF = "hr_staff"
    EMPLOYEE = "employee"

    @property
    def is_admin(self) -> bool:
        return self in (Role.SUPER_ADMIN, Role.OFFICE_ADMIN, Role.HR_MANAGER)


class OnboardingStatus(str, Enum):
    """Lifecycle of both the system workflow and per-user onboarding rows."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class AuditSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
