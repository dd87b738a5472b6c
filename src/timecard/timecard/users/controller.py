from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.web import admin_required, json_body, login_required
from ..container import Container
from .service import EmployeeForm


def _employee_form(data: dict) -> EmployeeForm:
    return EmployeeForm(
        employee_id=str(data.get("employee_id", "")),
        name=str(data.get("name", "")),
        email=str(data.get("email", "")),
        password=str(data.get("password", "") or ""),
        role=data.get("role", "user"),
        employment_type=data.get("employment_type", "regular"),
        hourly_wage=data.get("hourly_wage", 0),
        closing_date=data.get("closing_date", 31),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("email", "")), str(data.get("password", "")))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", 7)))
        session.update(s_user.to_session())

        return jsonify({"success": True, "user": s_user.to_session()})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me(current):
        user = container.user_service.get(current, current.user_id)
        return jsonify(user.to_public_dict())

    @app.route("/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    def admin_employees(current):
        return jsonify([u.to_public_dict() for u in container.user_service.list_employees(current)])

    @app.route("/admin/employees", methods=["POST"], endpoint="admin_create_employee")
    @admin_required
    def admin_create_employee(current):
        user_id = container.user_service.create_employee(current, _employee_form(json_body()))
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/admin/employees/<int:user_id>", methods=["PUT"], endpoint="admin_update_employee")
    @admin_required
    def admin_update_employee(current, user_id: int):
        container.user_service.update_employee(current, user_id, _employee_form(json_body()))
        return jsonify({"success": True})

    @app.route("/admin/employees/<int:user_id>", methods=["DELETE"], endpoint="admin_delete_employee")
    @admin_required
    def admin_delete_employee(current, user_id: int):
        container.user_service.delete_employee(current, user_id)
        return jsonify({"success": True})
