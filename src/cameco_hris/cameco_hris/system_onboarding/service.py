"""System onboarding workflow.

Ownership of system setup moves forward through the roles:

    super_admin  -> office_admin  -> hr_manager  -> completed

* super_admin initializes the system (company identity, core settings);
* office_admin configures the organization (departments, work sites, calendars);
* hr_manager configures HR and payroll policies, then marks onboarding complete.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..audit.model import AuditRecord
from ..audit.repository import AuditLogRepository
from ..common.datetime_utils import is_valid_timezone, now_local
from ..common.validators import (
    optional_email,
    require_choice,
    require_int_range,
    require_max_length,
    require_min_length,
    require_non_empty,
)
from ..core.constants import ALLOWED_COUNTRIES, ALLOWED_CURRENCIES, OWNER_ROLE_ORDER
from ..core.enums import AuditSeverity, OnboardingStatus, Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..settings.repository import SettingsRepository
from .model import CompanyProfile, SystemOnboarding
from .repository import SystemOnboardingRepository

logger = logging.getLogger(__name__)

COMPANY_SETTING_KEYS = (
    "company_name",
    "company_registration_number",
    "country",
    "timezone",
    "currency",
    "fiscal_year_start_month",
    "contact_email",
)

AUDIT_MODULE = "System Onboarding"


def next_owner_role(role: Role) -> Optional[Role]:
    """Role that setup is handed to after ``role``; None once the chain ends."""
    try:
        idx = OWNER_ROLE_ORDER.index(role)
    except ValueError:
        return None
    if idx + 1 >= len(OWNER_ROLE_ORDER):
        return None
    return OWNER_ROLE_ORDER[idx + 1]


def can_transition(current: Role, target: Role) -> bool:
    return next_owner_role(current) == target


def parse_company_profile(payload: Mapping[str, Any]) -> CompanyProfile:
    company_name = require_non_empty(payload.get("company_name"), "Company name")
    require_min_length(company_name, "Company name", 2)
    require_max_length(company_name, "Company name", 255)

    reg_number = str(payload.get("company_reg_number") or "").strip() or None
    require_max_length(reg_number, "Company registration number", 50)

    timezone = require_non_empty(payload.get("timezone"), "Timezone")
    if not is_valid_timezone(timezone):
        raise ValidationError(f"Unknown timezone: {timezone}")

    return CompanyProfile(
        company_name=company_name,
        company_reg_number=reg_number,
        country=require_choice(payload.get("country"), "Country", ALLOWED_COUNTRIES),
        timezone=timezone,
        currency=require_choice(payload.get("currency"), "Currency", ALLOWED_CURRENCIES),
        fiscal_year_start_month=require_int_range(
            payload.get("fiscal_year_start_month"), "Fiscal year start month", 1, 12
        ),
        contact_email=optional_email(payload.get("contact_email"), "Contact email"),
    )


@dataclass(frozen=True)
class OnboardingStatusView:
    status: OnboardingStatus
    onboarding_id: Optional[int]
    current_owner_role: Optional[Role]
    next_owner_role: Optional[Role]
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    company: dict[str, Optional[str]]

    def as_dict(self) -> dict:
        return {
            "status": self.status.value,
            "id": self.onboarding_id,
            "current_owner_role": self.current_owner_role.value if self.current_owner_role else None,
            "next_owner_role": self.next_owner_role.value if self.next_owner_role else None,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            **self.company,
        }


class SystemOnboardingService:
    def __init__(
        self,
        onboardings: SystemOnboardingRepository,
        settings: SettingsRepository,
        audit: AuditLogRepository,
    ):
        self._onboardings = onboardings
        self._settings = settings
        self._audit = audit

    def _get_or_raise(self, onboarding_id: int) -> SystemOnboarding:
        row = self._onboardings.get_by_id(int(onboarding_id))
        if not row:
            raise NotFoundError(f"Onboarding workflow {onboarding_id} not found")
        return row

    @staticmethod
    def _require_owner(current_role: Role, row: SystemOnboarding) -> None:
        if current_role == Role.SUPER_ADMIN:
            return
        if current_role != row.current_owner_role:
            raise AuthorizationError(
                f"Onboarding is owned by {row.current_owner_role.value}; {current_role.value} cannot act on it"
            )

    def initialize(
        self,
        *,
        current_role: Role,
        user_id: int,
        payload: Mapping[str, Any],
        now: Optional[datetime] = None,
    ) -> int:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only Super Admin can initialize the system")

        if self._onboardings.get_latest():
            raise InvalidTransitionError("System onboarding has already been initialized")

        profile = parse_company_profile(payload)
        now = now or now_local()

        onboarding_id = self._onboardings.initialize(
            status=OnboardingStatus.NOT_STARTED,
            current_owner_role=Role.SUPER_ADMIN,
            metadata=profile.as_settings(),
            created_by=int(user_id),
            started_at=now,
            settings={k: v for k, v in profile.as_settings().items() if v is not None},
            audit=AuditRecord(
                user_id=int(user_id),
                action="system_onboarding_initialize",
                description=f"Initialized system with company profile: {profile.company_name}",
                severity=AuditSeverity.HIGH,
                module=AUDIT_MODULE,
                metadata={
                    "company_name": profile.company_name,
                    "country": profile.country,
                    "timezone": profile.timezone,
                    "currency": profile.currency,
                },
            ),
        )
        logger.info("System onboarding %s initialized", onboarding_id, extra={"user_id": user_id})
        return onboarding_id

    def transition(self, *, current_role: Role, user_id: int, onboarding_id: int, next_role: str | Role) -> SystemOnboarding:
        try:
            target = Role(next_role)
        except ValueError:
            raise ValidationError(f"Invalid role transition: {next_role}")

        row = self._get_or_raise(onboarding_id)
        if row.is_completed:
            raise InvalidTransitionError("Onboarding is already completed")

        self._require_owner(current_role, row)

        if not can_transition(row.current_owner_role, target):
            raise InvalidTransitionError(
                f"Cannot hand onboarding from {row.current_owner_role.value} to {target.value}"
            )

        self._onboardings.update(
            row.onboarding_id,
            status=OnboardingStatus.IN_PROGRESS,
            current_owner_role=target,
        )
        self._audit.log(
            user_id=int(user_id),
            action="system_onboarding_transition",
            description=f"Onboarding handed from {row.current_owner_role.value} to {target.value}",
            severity=AuditSeverity.MEDIUM,
            module=AUDIT_MODULE,
            metadata={"onboarding_id": row.onboarding_id, "from": row.current_owner_role.value, "to": target.value},
        )
        logger.info(
            "System onboarding %s: %s -> %s",
            row.onboarding_id,
            row.current_owner_role.value,
            target.value,
            extra={"user_id": user_id},
        )
        return self._get_or_raise(row.onboarding_id)

    def complete(
        self,
        *,
        current_role: Role,
        user_id: int,
        onboarding_id: int,
        now: Optional[datetime] = None,
    ) -> SystemOnboarding:
        row = self._get_or_raise(onboarding_id)
        if row.is_completed:
            raise InvalidTransitionError("Onboarding is already completed")

        self._require_owner(current_role, row)

        if row.current_owner_role != OWNER_ROLE_ORDER[-1]:
            raise InvalidTransitionError(
                f"Onboarding can only be completed by {OWNER_ROLE_ORDER[-1].value}; "
                f"it is still owned by {row.current_owner_role.value}"
            )

        now = now or now_local()
        self._onboardings.update(row.onboarding_id, status=OnboardingStatus.COMPLETED, completed_at=now)
        self._audit.log(
            user_id=int(user_id),
            action="system_onboarding_complete",
            description="System onboarding completed",
            severity=AuditSeverity.HIGH,
            module=AUDIT_MODULE,
            metadata={"onboarding_id": row.onboarding_id},
        )
        logger.info("System onboarding %s completed", row.onboarding_id, extra={"user_id": user_id})
        return self._get_or_raise(row.onboarding_id)

    def get_status(self) -> OnboardingStatusView:
        row = self._onboardings.get_latest()
        company = self._settings.get_many(COMPANY_SETTING_KEYS)
        if not row:
            return OnboardingStatusView(
                status=OnboardingStatus.NOT_STARTED,
                onboarding_id=None,
                current_owner_role=None,
                next_owner_role=None,
                started_at=None,
                completed_at=None,
                company=company,
            )
        return OnboardingStatusView(
            status=row.status,
            onboarding_id=row.onboarding_id,
            current_owner_role=row.current_owner_role,
            next_owner_role=None if row.is_completed else next_owner_role(row.current_owner_role),
            started_at=row.started_at,
            completed_at=row.completed_at,
            company=company,
        )

    def is_completed(self) -> bool:
        row = self._onboardings.get_latest()
        return bool(row and row.is_completed)
