from __future__ import annotations

from flask import Flask, request

from ..common.http import json_ok
from ..container import Container
from ..core.enums import EventStatus
from .model import format_percentage


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/reports/popularity", methods=["GET"], endpoint="report_popularity")
    def report_popularity():
        rows = reports.popularity(
            college_id=request.args.get("college_id"),
            type=request.args.get("type"),
            limit=request.args.get("limit"),
        )
        return json_ok(events=[r.to_dict() for r in rows])

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="report_attendance")
    def report_attendance():
        event_id = request.args.get("event_id")
        if event_id:
            return json_ok(event=reports.event_attendance(event_id).to_dict())
        rows = reports.attendance(college_id=request.args.get("college_id"))
        return json_ok(events=[r.to_dict() for r in rows])

    @app.route("/api/reports/feedback", methods=["GET"], endpoint="report_feedback")
    def report_feedback():
        event_id = request.args.get("event_id")
        if event_id:
            stats, details = reports.event_feedback(event_id)
            event = stats.to_dict()
            event["feedback_details"] = [d.to_dict() for d in details]
            return json_ok(event=event)
        rows = reports.feedback(college_id=request.args.get("college_id"))
        return json_ok(events=[r.to_dict() for r in rows])

    @app.route(
        "/api/reports/student/<student_id>/participation", methods=["GET"], endpoint="report_student_participation"
    )
    def report_student_participation(student_id: str):
        participation = reports.student_participation(student_id, college_id=request.args.get("college_id"))
        return json_ok(student=participation.to_dict())

    @app.route("/api/reports/top-active", methods=["GET"], endpoint="report_top_active")
    def report_top_active():
        rows = reports.top_active(college_id=request.args.get("college_id"), limit=request.args.get("limit"))
        return json_ok(students=[r.to_dict() for r in rows])

    @app.route("/api/reports/registrations-per-event", methods=["GET"], endpoint="report_registrations_per_event")
    def report_registrations_per_event():
        rows = reports.registrations_per_event(
            college_id=request.args.get("college_id"),
            status=request.args.get("status", EventStatus.SCHEDULED.value),
        )
        return json_ok(events=[r.to_dict() for r in rows])

    @app.route("/api/reports/filter", methods=["GET"], endpoint="report_filter")
    def report_filter():
        summaries, filters = reports.filter_events(request.args)
        events = []
        for summary in summaries:
            d = summary.to_dict()
            d["attendance_percentage"] = format_percentage(summary.attendance_count or 0, summary.registrations_count)
            events.append(d)
        return json_ok(events=events, pagination={"page": filters.page, "limit": filters.limit})
