from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/approvals", methods=["GET"], endpoint="admin_approvals")
    @admin_required
    def admin_approvals(current):
        return jsonify(container.approval_service.list_pending(current))

    @app.route("/admin/approvals/<int:record_id>/approve", methods=["POST"], endpoint="admin_approve")
    @admin_required
    def admin_approve(current, record_id: int):
        container.approval_service.approve(current, record_id)
        return jsonify({"success": True, "status": "approved"})

    @app.route("/admin/approvals/<int:record_id>/remand", methods=["POST"], endpoint="admin_remand")
    @admin_required
    def admin_remand(current, record_id: int):
        container.approval_service.remand(current, record_id)
        return jsonify({"success": True, "status": "remanded"})
