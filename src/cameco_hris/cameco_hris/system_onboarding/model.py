from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import OnboardingStatus, Role


@dataclass(frozen=True)
class SystemOnboarding:
    """Domain entity: the single row tracking who currently owns system setup."""

    onboarding_id: int
    status: OnboardingStatus
    current_owner_role: Role
    created_by: int
    started_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    completed_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.status == OnboardingStatus.COMPLETED


@dataclass(frozen=True)
class CompanyProfile:
    """Validated company identity captured when Super Admin initializes the system."""

    company_name: str
    country: str
    timezone: str
    currency: str
    fiscal_year_start_month: int
    company_reg_number: Optional[str] = None
    contact_email: Optional[str] = None

    def as_settings(self) -> dict[str, Optional[str]]:
        return {
            "company_name": self.company_name,
            "company_registration_number": self.company_reg_number,
            "country": self.country,
            "timezone": self.timezone,
            "currency": self.currency,
            "fiscal_year_start_month": str(self.fiscal_year_start_month),
            "contact_email": self.contact_email,
        }
