from __future__ import annotations

from flask import Flask, request

from ..common.auth import admin_token_required
from ..common.http import json_body, json_ok
from ..container import Container


def _pagination(filters) -> dict:
    return {"page": filters.page, "limit": filters.limit}


def register(app: Flask, container: Container) -> None:
    events = container.event_service

    @app.route("/api/colleges", methods=["GET"], endpoint="colleges_list")
    def colleges_list():
        return json_ok(colleges=[c.to_dict() for c in events.list_colleges()])

    @app.route("/api/events", methods=["GET"], endpoint="events_list")
    def events_list():
        summaries, filters = events.list_public(request.args)
        return json_ok(events=[s.to_dict() for s in summaries], pagination=_pagination(filters))

    @app.route("/api/events/<event_id>", methods=["GET"], endpoint="event_detail")
    def event_detail(event_id: str):
        return json_ok(event=events.get_event(event_id).to_dict())

    # --- admin ---

    @app.route("/api/admin/events", methods=["POST"], endpoint="admin_event_create")
    @admin_token_required
    def admin_event_create():
        summary = events.create_event(json_body())
        return json_ok(201, message="Event created successfully", event=summary.to_dict())

    @app.route("/api/admin/events/<event_id>", methods=["PUT"], endpoint="admin_event_update")
    @admin_token_required
    def admin_event_update(event_id: str):
        summary = events.update_event(event_id, json_body())
        return json_ok(message="Event updated successfully", event=summary.to_dict())

    @app.route("/api/admin/events/<event_id>", methods=["DELETE"], endpoint="admin_event_delete")
    @admin_token_required
    def admin_event_delete(event_id: str):
        if request.args.get("hard") in ("1", "true"):
            events.delete_event(event_id)
            return json_ok(message="Event deleted successfully")
        event = events.cancel_event(event_id)
        return json_ok(message="Event cancelled successfully", event=event.to_dict())

    @app.route("/api/admin/events", methods=["GET"], endpoint="admin_events_list")
    @admin_token_required
    def admin_events_list():
        summaries, filters = events.list_admin(request.args)
        return json_ok(events=[s.to_dict() for s in summaries], pagination=_pagination(filters))

    @app.route("/api/admin/colleges/<college_id>/students", methods=["GET"], endpoint="admin_college_students")
    @admin_token_required
    def admin_college_students(college_id: str):
        return json_ok(students=[s.to_dict() for s in events.list_college_students(college_id)])

    @app.route("/api/admin/colleges/<college_id>", methods=["DELETE"], endpoint="admin_college_delete")
    @admin_token_required
    def admin_college_delete(college_id: str):
        events.delete_college(college_id)
        return json_ok(message="College deleted successfully")

    @app.route("/api/admin/students/<student_id>", methods=["DELETE"], endpoint="admin_student_delete")
    @admin_token_required
    def admin_student_delete(student_id: str):
        events.delete_student(student_id)
        return json_ok(message="Student deleted successfully")
