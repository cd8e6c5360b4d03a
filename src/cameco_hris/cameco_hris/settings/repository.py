from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence


class SettingsRepository(Protocol):
    """Key/value store for system-wide settings (company identity, onboarding flags)."""

    def get_many(self, keys: Sequence[str]) -> dict[str, Optional[str]]:
        raise NotImplementedError

    def upsert_many(self, values: Mapping[str, Optional[str]], *, updated_by: Optional[int] = None) -> None:
        raise NotImplementedError
