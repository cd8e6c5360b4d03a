from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_user_id, json_body, login_required
from ..container import Container
from .model import UserOnboarding


def _row_json(row: UserOnboarding) -> dict:
    return {
        "id": row.onboarding_id,
        "user_id": row.user_id,
        "status": row.status.value,
        "checklist": row.checklist,
        "started_at": row.started_at.isoformat() if row.started_at else None,
        "completed_at": row.completed_at.isoformat() if row.completed_at else None,
        "skipped_at": row.skipped_at.isoformat() if row.skipped_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/onboarding/checklist", methods=["GET"], endpoint="onboarding_checklist")
    @login_required
    def onboarding_checklist():
        return jsonify(container.user_onboarding_service.checklist_view(current_user_id()).as_dict())

    @app.route("/onboarding/start", methods=["POST"], endpoint="onboarding_start")
    @login_required
    def onboarding_start():
        body = json_body()
        svc = container.user_onboarding_service
        if "checklist" in body:
            row = svc.start(current_user_id(), checklist=body.get("checklist"))
        else:
            row = svc.refresh(current_user_id())
        return jsonify({"success": True, "onboarding": _row_json(row)})

    @app.route("/onboarding/complete", methods=["POST"], endpoint="onboarding_complete")
    @login_required
    def onboarding_complete():
        row = container.user_onboarding_service.complete(current_user_id())
        return jsonify({"success": True, "onboarding": _row_json(row)})

    @app.route("/onboarding/skip", methods=["POST"], endpoint="onboarding_skip")
    @login_required
    def onboarding_skip():
        body = json_body()
        row = container.user_onboarding_service.skip(
            current_user_id(),
            actor_id=current_user_id(),
            reason=body.get("reason"),
        )
        return jsonify({"success": True, "onboarding": _row_json(row)})
