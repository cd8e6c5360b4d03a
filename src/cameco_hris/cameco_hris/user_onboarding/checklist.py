"""Per-user onboarding checklist.

A checklist is a list of ``{key, label, done}`` items derived from the user's
account and profile; the UI keeps parts of the app locked until it is complete.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Optional

from ..users.model import Profile, User
from .model import ChecklistItem

DONE_FLAGS = ("done", "completed", "checked")


def _filled(value: Optional[str]) -> bool:
    return bool(value and str(value).strip())


def generate_checklist_for_user(user: User, profile: Optional[Profile] = None) -> list[ChecklistItem]:
    has_name = bool(profile and (_filled(profile.first_name) or _filled(profile.last_name)))
    if not has_name:
        # fall back to the account name
        has_name = _filled(user.name)

    return [
        ChecklistItem(key="name", label="Set full name", done=has_name),
        ChecklistItem(key="verify_email", label="Verify email", done=user.email_verified_at is not None),
        ChecklistItem(key="phone", label="Add contact number", done=bool(profile and _filled(profile.contact_number))),
        ChecklistItem(key="address", label="Add address", done=bool(profile and _filled(profile.address))),
        ChecklistItem(
            key="emergency_contact",
            label="Add emergency contact",
            done=bool(profile and _filled(profile.emergency_contact)),
        ),
    ]


def is_item_done(item: Any) -> bool:
    if isinstance(item, ChecklistItem):
        return item.done
    if isinstance(item, dict):
        # first flag present wins, so an explicit done=False is not overridden
        for flag in DONE_FLAGS:
            if item.get(flag) is not None:
                return bool(item[flag])
    return False


def percent_complete(checklist: Any) -> int:
    """Share of done items, 0..100, rounded half up."""
    if not isinstance(checklist, (list, tuple)) or not checklist:
        return 0
    completed = sum(1 for item in checklist if is_item_done(item))
    return int(math.floor(completed * 100 / len(checklist) + 0.5))


def to_storable(checklist: Iterable[Any]) -> list[dict]:
    out: list[dict] = []
    for item in checklist:
        if isinstance(item, ChecklistItem):
            out.append(item.as_dict())
        elif isinstance(item, dict):
            out.append(dict(item))
    return out
