from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_role, current_user_id, json_body, super_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/system/organization/departments", methods=["GET"], endpoint="departments_index")
    @admin_required
    def departments_index():
        svc = container.department_service
        if request.args.get("view") == "tree":
            return jsonify({"departments": svc.tree(), "stats": svc.stats()})
        return jsonify({"departments": [d.as_dict() for d in svc.list_all()], "stats": svc.stats()})

    @app.route("/system/organization/departments", methods=["POST"], endpoint="departments_store")
    @admin_required
    def departments_store():
        dept = container.department_service.create(
            current_role=current_role(),
            user_id=current_user_id(),
            payload=json_body(),
        )
        return jsonify({"success": True, "message": "Department created successfully", "department": dept.as_dict()}), 201

    @app.route("/system/organization/departments/<int:department_id>", methods=["GET"], endpoint="departments_show")
    @admin_required
    def departments_show(department_id: int):
        return jsonify({"department": container.department_service.get(department_id).as_dict()})

    @app.route("/system/organization/departments/<int:department_id>", methods=["PUT"], endpoint="departments_update")
    @admin_required
    def departments_update(department_id: int):
        dept = container.department_service.update(
            current_role=current_role(),
            user_id=current_user_id(),
            department_id=department_id,
            payload=json_body(),
        )
        return jsonify({"success": True, "message": "Department updated successfully", "department": dept.as_dict()})

    @app.route("/system/organization/departments/<int:department_id>", methods=["DELETE"], endpoint="departments_destroy")
    @admin_required
    def departments_destroy(department_id: int):
        container.department_service.delete(
            current_role=current_role(),
            user_id=current_user_id(),
            department_id=department_id,
        )
        return jsonify({"success": True, "message": "Department deleted successfully"})

    @app.route("/system/organization/departments/seed", methods=["POST"], endpoint="departments_seed")
    @super_admin_required
    def departments_seed():
        body = json_body()
        created = container.department_service.seed_defaults(
            current_role=current_role(),
            user_id=current_user_id(),
            departments=body.get("departments"),
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": f"Seeded {len(created)} departments",
                    "departments": [d.as_dict() for d in created],
                }
            ),
            201,
        )
