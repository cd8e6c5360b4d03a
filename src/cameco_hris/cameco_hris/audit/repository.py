from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import AuditSeverity
from .model import AuditEntry


class AuditLogRepository(Protocol):
    def log(
        self,
        *,
        user_id: Optional[int],
        action: str,
        description: str,
        severity: AuditSeverity = AuditSeverity.MEDIUM,
        module: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> int:
        raise NotImplementedError

    def record_skip(
        self,
        *,
        user_id: int,
        user_onboarding_id: Optional[int],
        reason: Optional[str],
        skipped_at: datetime,
        scope: str = "user",
    ) -> int:
        """Append a row to onboarding_skips."""

        raise NotImplementedError

    def list_recent(self, *, action: Optional[str] = None, limit: int = 50) -> Sequence[AuditEntry]:
        raise NotImplementedError
