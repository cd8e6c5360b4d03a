from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_user_id, json_body, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import User


def _current_user(container: Container) -> User:
    user = container.user_repo.get_by_id(current_user_id())
    if not user:
        raise NotFoundError("User not found")
    return user


def register(app: Flask, container: Container) -> None:
    @app.route("/profile-completion", methods=["GET"], endpoint="profile_completion_show")
    @login_required
    def profile_completion_show():
        user = _current_user(container)
        svc = container.admin_onboarding_service
        return jsonify({"requires_onboarding": svc.requires_onboarding(user), **svc.progress(user)})

    @app.route("/profile-completion", methods=["POST"], endpoint="profile_completion_store")
    @login_required
    def profile_completion_store():
        user = _current_user(container)
        if not user.is_admin:
            raise AuthorizationError("Profile completion is only available to admin accounts")
        employee = container.admin_onboarding_service.create_employee_for_admin(user, json_body())
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Profile completed successfully! Welcome to the system.",
                    "employee": employee.as_dict(),
                    "redirect": "/dashboard",
                }
            ),
            201,
        )

    @app.route("/profile-completion/skip", methods=["POST"], endpoint="profile_completion_skip")
    @login_required
    def profile_completion_skip():
        user = _current_user(container)
        if not user.is_admin:
            raise AuthorizationError("Profile completion is only available to admin accounts")
        container.admin_onboarding_service.skip(user)
        return jsonify({"success": True, "message": "Profile completion skipped", "redirect": "/dashboard"})
