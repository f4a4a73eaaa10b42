from __future__ import annotations

import io

from flask import Flask, send_file

from ..common.auth import admin_token_required
from ..common.http import json_body, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/registrations/<registration_id>/checkin", methods=["POST"], endpoint="registration_checkin")
    def registration_checkin(registration_id: str):
        data = json_body()
        record, created = attendance.check_in(registration_id, method=data.get("method"))
        if created:
            return json_ok(201, message="Check-in successful", attendance=record.to_dict())
        return json_ok(message="Already checked in", attendance=record.to_dict())

    @app.route("/api/registrations/<registration_id>/checkin-qr", methods=["GET"], endpoint="registration_checkin_qr")
    def registration_checkin_qr(registration_id: str):
        png = attendance.checkin_qr_png(registration_id)
        return send_file(io.BytesIO(png), mimetype="image/png")

    @app.route(
        "/api/admin/registrations/<registration_id>/attendance", methods=["POST"], endpoint="admin_mark_attendance"
    )
    @admin_token_required
    def admin_mark_attendance(registration_id: str):
        data = json_body()
        record = attendance.mark_attendance(registration_id, data.get("present"))
        return json_ok(message="Attendance updated successfully", attendance=record.to_dict())
