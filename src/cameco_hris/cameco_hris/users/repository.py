from __future__ import annotations

from typing import Optional, Protocol

from .model import Profile, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def mark_profile_completion_skipped(self, user_id: int) -> bool:
        raise NotImplementedError


class ProfileRepository(Protocol):
    def get_by_user_id(self, user_id: int) -> Optional[Profile]:
        raise NotImplementedError
