from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import super_admin_required
from ..container import Container
from .model import AuditEntry


def _entry_json(e: AuditEntry) -> dict:
    return {
        "id": e.log_id,
        "user_id": e.user_id,
        "action": e.action,
        "description": e.description,
        "severity": e.severity.value,
        "module": e.module,
        "metadata": e.metadata,
        "created_at": e.created_at.isoformat() if e.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/system/security/audit", methods=["GET"], endpoint="security_audit_index")
    @super_admin_required
    def security_audit_index():
        try:
            limit = max(1, min(int(request.args.get("limit", 50)), 500))
        except ValueError:
            limit = 50
        entries = container.audit_repo.list_recent(action=request.args.get("action") or None, limit=limit)
        return jsonify({"entries": [_entry_json(e) for e in entries]})
