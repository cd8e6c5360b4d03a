from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.http import current_user_id, json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(
            str(body.get("username") or ""),
            str(body.get("password") or ""),
        )

        session.clear()
        session.permanent = bool(body.get("remember"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

        return jsonify(
            {
                "success": True,
                "message": "Signed in",
                "user": {"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value},
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.user_repo.get_by_id(current_user_id())
        if not user:
            session.clear()
            raise NotFoundError("User not found")

        return jsonify(
            {
                "id": user.user_id,
                "name": user.name,
                "username": user.username,
                "email": user.email,
                "role": user.role.value,
                "employee_id": user.employee_id,
                "department_id": user.department_id,
                "requires_profile_completion": container.admin_onboarding_service.requires_onboarding(user),
                "system_onboarding_completed": container.system_onboarding_service.is_completed(),
            }
        )
