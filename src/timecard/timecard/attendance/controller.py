from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.web import json_body, login_required, month_arg
from ..container import Container
from ..payroll.time_calculation import format_minutes
from .service import to_ui


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance", methods=["GET"], endpoint="attendance_month")
    @login_required
    def attendance_month(current):
        month = month_arg()
        rows = container.attendance_service.month_view(current, month)
        return jsonify(
            {
                "month": str(month),
                "previous": str(month.previous()),
                "next": str(month.next()),
                "records": rows,
            }
        )

    @app.route("/attendance/<work_date>", methods=["GET"], endpoint="attendance_day")
    @login_required
    def attendance_day(current, work_date: str):
        rec = container.attendance_service.get_record(current, parse_iso_date(work_date))
        if rec is None:
            return jsonify({"success": False, "message": "No record for this date"}), 404
        return jsonify(to_ui(rec))

    @app.route("/attendance/preview", methods=["POST"], endpoint="attendance_preview")
    @login_required
    def attendance_preview(current):
        data = json_body()
        stats = container.attendance_service.preview(data.get("work_spans") or [], data.get("breaks") or [])
        out = asdict(stats)
        out.update(
            {
                "work_time": format_minutes(stats.work_minutes),
                "overtime": format_minutes(stats.overtime_minutes),
                "night_time": format_minutes(stats.night_minutes),
            }
        )
        return jsonify(out)

    @app.route("/attendance/<work_date>", methods=["PUT"], endpoint="attendance_save")
    @login_required
    def attendance_save(current, work_date: str):
        data = json_body()
        record_id = container.attendance_service.save_record(
            current,
            work_date=parse_iso_date(work_date),
            work_spans=data.get("work_spans") or [],
            breaks=data.get("breaks") or [],
            note=str(data.get("note", "") or ""),
            work_content=str(data.get("work_content", "") or ""),
            submit=bool(data.get("submit", False)),
        )
        return jsonify({"success": True, "record_id": record_id})

    @app.route("/attendance/records/<int:record_id>/submit", methods=["POST"], endpoint="attendance_submit")
    @login_required
    def attendance_submit(current, record_id: int):
        container.attendance_service.submit_record(current, record_id)
        return jsonify({"success": True})

    @app.route("/attendance/records/<int:record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    def attendance_delete(current, record_id: int):
        container.attendance_service.delete_record(current, record_id)
        return jsonify({"success": True})
