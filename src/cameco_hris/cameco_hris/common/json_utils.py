from __future__ import annotations

import json
from typing import Any


def load_json_field(raw: Any, default: Any = None) -> Any:
    """Decode a JSON column that drivers may hand back as str, bytes or already-decoded."""
    if raw is None:
        return default
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        if not raw.strip():
            return default
        try:
            return json.loads(raw)
        except ValueError:
            return default
    return raw


def dump_json_field(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value, default=str)
