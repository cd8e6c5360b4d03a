from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_role, current_user_id, json_body, login_required, super_admin_required
from ..container import Container


def _onboarding_json(row) -> dict:
    return {
        "id": row.onboarding_id,
        "status": row.status.value,
        "current_owner_role": row.current_owner_role.value,
        "started_at": row.started_at.isoformat() if row.started_at else None,
        "completed_at": row.completed_at.isoformat() if row.completed_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/system/onboarding/status", methods=["GET"], endpoint="system_onboarding_status")
    @login_required
    def system_onboarding_status():
        return jsonify(container.system_onboarding_service.get_status().as_dict())

    @app.route("/system/onboarding/initialize", methods=["POST"], endpoint="system_onboarding_initialize")
    @super_admin_required
    def system_onboarding_initialize():
        onboarding_id = container.system_onboarding_service.initialize(
            current_role=current_role(),
            user_id=current_user_id(),
            payload=json_body(),
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "System initialized successfully",
                    "id": onboarding_id,
                    "redirect": "/system/organization/overview",
                }
            ),
            201,
        )

    @app.route(
        "/system/onboarding/<int:onboarding_id>/transition",
        methods=["POST"],
        endpoint="system_onboarding_transition",
    )
    @admin_required
    def system_onboarding_transition(onboarding_id: int):
        body = json_body()
        row = container.system_onboarding_service.transition(
            current_role=current_role(),
            user_id=current_user_id(),
            onboarding_id=onboarding_id,
            next_role=str(body.get("next_role") or ""),
        )
        return jsonify({"success": True, "message": "Workflow transitioned", "onboarding": _onboarding_json(row)})

    @app.route(
        "/system/onboarding/<int:onboarding_id>/complete",
        methods=["POST"],
        endpoint="system_onboarding_complete",
    )
    @admin_required
    def system_onboarding_complete(onboarding_id: int):
        row = container.system_onboarding_service.complete(
            current_role=current_role(),
            user_id=current_user_id(),
            onboarding_id=onboarding_id,
        )
        return jsonify({"success": True, "message": "Onboarding workflow completed", "onboarding": _onboarding_json(row)})
