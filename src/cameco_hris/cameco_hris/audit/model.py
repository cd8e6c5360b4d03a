from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.enums import AuditSeverity


@dataclass(frozen=True)
class AuditEntry:
    log_id: int
    user_id: Optional[int]
    action: str
    description: str
    severity: AuditSeverity
    module: Optional[str]
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AuditRecord:
    """An audit entry waiting to be written, possibly inside another repository's transaction."""

    user_id: Optional[int]
    action: str
    description: str
    severity: AuditSeverity = AuditSeverity.MEDIUM
    module: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)
