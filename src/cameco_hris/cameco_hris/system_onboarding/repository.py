from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol

from ..audit.model import AuditRecord
from ..core.enums import OnboardingStatus, Role
from .model import SystemOnboarding


class SystemOnboardingRepository(Protocol):
    def initialize(
        self,
        *,
        status: OnboardingStatus,
        current_owner_role: Role,
        metadata: Mapping[str, Any],
        created_by: int,
        started_at: datetime,
        settings: Mapping[str, Optional[str]],
        audit: AuditRecord,
    ) -> int:
        """Insert the single workflow row, its settings and its audit entry as one unit.

        Nothing is written if any part fails. Raises InvalidTransitionError when a
        workflow row already exists.
        """

        raise NotImplementedError

    def get_by_id(self, onboarding_id: int) -> Optional[SystemOnboarding]:
        raise NotImplementedError

    def get_latest(self) -> Optional[SystemOnboarding]:
        raise NotImplementedError

    def update(
        self,
        onboarding_id: int,
        *,
        status: Optional[OnboardingStatus] = None,
        current_owner_role: Optional[Role] = None,
        completed_at: Optional[datetime] = None,
    ) -> bool:
        """Update only the given columns; returns False when the row is gone."""

        raise NotImplementedError
