from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import OnboardingStatus


@dataclass(frozen=True)
class ChecklistItem:
    key: str
    label: str
    done: bool = False

    def as_dict(self) -> dict:
        return {"key": self.key, "label": self.label, "done": self.done}


@dataclass(frozen=True)
class UserOnboarding:
    onboarding_id: int
    user_id: int
    status: OnboardingStatus
    checklist: list[dict] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    skipped_at: Optional[datetime] = None
    skipped_by: Optional[int] = None
