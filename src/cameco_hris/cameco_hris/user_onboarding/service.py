from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..audit.repository import AuditLogRepository
from ..common.datetime_utils import now_local
from ..common.json_utils import load_json_field
from ..core.enums import OnboardingStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import ProfileRepository, UserRepository
from .checklist import generate_checklist_for_user, percent_complete, to_storable
from .model import UserOnboarding
from .repository import UserOnboardingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChecklistView:
    user_id: int
    status: OnboardingStatus
    items: list[dict]
    percent: int

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "status": self.status.value,
            "items": self.items,
            "percent": self.percent,
            "completed": self.status == OnboardingStatus.COMPLETED,
        }


class UserOnboardingService:
    def __init__(
        self,
        onboardings: UserOnboardingRepository,
        users: UserRepository,
        profiles: ProfileRepository,
        audit: AuditLogRepository,
    ):
        self._onboardings = onboardings
        self._users = users
        self._profiles = profiles
        self._audit = audit

    def get_for_user(self, user_id: int) -> Optional[UserOnboarding]:
        return self._onboardings.find_by_user(int(user_id))

    @staticmethod
    def _coerce_checklist(checklist: Any) -> Optional[list[dict]]:
        if checklist is None:
            return None
        checklist = load_json_field(checklist, None) if isinstance(checklist, (str, bytes)) else checklist
        if not isinstance(checklist, (list, tuple)):
            raise ValidationError("Checklist must be a list of items")
        return to_storable(checklist)

    def start(
        self,
        user_id: int,
        *,
        checklist: Any = None,
        now: Optional[datetime] = None,
    ) -> UserOnboarding:
        """Start (or restart) onboarding; auto-completes once every checklist item is done."""
        now = now or now_local()
        items = self._coerce_checklist(checklist)

        existing = self._onboardings.find_by_user(int(user_id))
        # restarting never reopens a completed onboarding
        status = (
            OnboardingStatus.COMPLETED
            if existing and existing.status == OnboardingStatus.COMPLETED
            else OnboardingStatus.IN_PROGRESS
        )
        result = self._onboardings.create_or_update_by_user(
            int(user_id),
            status=status,
            started_at=now,
            checklist=items,
        )

        effective = items if items is not None else result.checklist
        if percent_complete(effective) >= 100 and result.status != OnboardingStatus.COMPLETED:
            completed = self._onboardings.mark_complete(int(user_id), completed_at=now)
            logger.info("User onboarding auto-completed", extra={"user_id": user_id})
            return completed or result
        return result

    def complete(self, user_id: int, *, now: Optional[datetime] = None) -> UserOnboarding:
        row = self._onboardings.mark_complete(int(user_id), completed_at=now or now_local())
        if not row:
            raise NotFoundError("Onboarding has not been started for this user")
        return row

    def skip(
        self,
        user_id: int,
        *,
        actor_id: Optional[int] = None,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> UserOnboarding:
        now = now or now_local()
        result = self._onboardings.mark_skipped(int(user_id), skipped_at=now, skipped_by=actor_id)

        # A failed audit row must not undo the skip itself.
        try:
            self._audit.record_skip(
                user_id=int(actor_id if actor_id is not None else user_id),
                user_onboarding_id=result.onboarding_id if result else None,
                reason=(reason or "").strip() or None,
                skipped_at=now,
            )
        except Exception:
            logger.warning("Failed to record onboarding skip audit", exc_info=True, extra={"user_id": user_id})

        return result

    def refresh(self, user_id: int, *, now: Optional[datetime] = None) -> UserOnboarding:
        """Rebuild the checklist from the current account and profile, then start with it."""
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        profile = self._profiles.get_by_user_id(user.user_id)
        return self.start(user.user_id, checklist=generate_checklist_for_user(user, profile), now=now)

    def checklist_view(self, user_id: int) -> ChecklistView:
        row = self.get_for_user(user_id)
        if row and row.checklist:
            items: Sequence[dict] = row.checklist
        else:
            user = self._users.get_by_id(int(user_id))
            if not user:
                raise NotFoundError("User not found")
            items = to_storable(generate_checklist_for_user(user, self._profiles.get_by_user_id(user.user_id)))

        return ChecklistView(
            user_id=int(user_id),
            status=row.status if row else OnboardingStatus.NOT_STARTED,
            items=list(items),
            percent=percent_complete(list(items)),
        )
