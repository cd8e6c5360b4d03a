from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import OnboardingStatus
from .model import UserOnboarding


class UserOnboardingRepository(Protocol):
    def find_by_user(self, user_id: int) -> Optional[UserOnboarding]:
        raise NotImplementedError

    def create_or_update_by_user(
        self,
        user_id: int,
        *,
        status: OnboardingStatus,
        started_at: datetime,
        checklist: Optional[list[dict]] = None,
    ) -> UserOnboarding:
        """Upsert the user's row; a None checklist leaves the stored one untouched."""

        raise NotImplementedError

    def mark_complete(self, user_id: int, *, completed_at: datetime) -> Optional[UserOnboarding]:
        raise NotImplementedError

    def mark_skipped(self, user_id: int, *, skipped_at: datetime, skipped_by: Optional[int]) -> UserOnboarding:
        """Skip creates the row when the user never started onboarding."""

        raise NotImplementedError
