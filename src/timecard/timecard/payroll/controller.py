from __future__ import annotations

import csv
import io

from flask import Flask, jsonify

from ..attendance.service import to_ui
from ..common.web import admin_required, login_required, month_arg
from ..container import Container
from .service import EXPORT_FIELDS
from .time_calculation import format_minutes


def _summary_json(summary) -> dict:
    out = summary.to_dict()
    out.update(
        {
            "work_time": format_minutes(summary.total_work_min),
            "overtime": format_minutes(summary.total_overtime_min),
            "night_time": format_minutes(summary.total_night_min),
        }
    )
    return out


def register(app: Flask, container: Container) -> None:
    def _write_report_csv(*, rows: list[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS, quoting=csv.QUOTE_ALL)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/summary", methods=["GET"], endpoint="my_summary")
    @login_required
    def my_summary(current):
        summary = container.payroll_report_service.monthly_summary(current, current.user_id, month_arg())
        return jsonify(_summary_json(summary))

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard(current):
        month = month_arg()
        data = container.payroll_report_service.admin_dashboard(current, month)
        return jsonify(
            {
                "month": str(month),
                "total_records": data.total_records,
                "employees": [r.to_dict() for r in data.rows],
            }
        )

    @app.route("/admin/employees/<int:user_id>/summary", methods=["GET"], endpoint="admin_employee_summary")
    @admin_required
    def admin_employee_summary(current, user_id: int):
        month = month_arg()
        summary = container.payroll_report_service.monthly_summary(current, user_id, month)
        records = container.attendance_service.list_month(user_id, month)
        out = _summary_json(summary)
        out["records"] = [to_ui(r) for r in records]
        return jsonify(out)

    @app.route("/admin/employees/<int:user_id>/export.csv", methods=["GET"], endpoint="admin_employee_export")
    @admin_required
    def admin_employee_export(current, user_id: int):
        month = month_arg()
        user, rows = container.payroll_report_service.export_rows(current, user_id, month)
        return _write_report_csv(rows=rows, filename=f"attendance_{user.employee_id}_{month}.csv")
