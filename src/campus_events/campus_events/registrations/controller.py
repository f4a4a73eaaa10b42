from __future__ import annotations

from flask import Flask, request

from ..common.auth import admin_token_required
from ..common.http import json_body, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    registrations = container.registration_service
    feedback = container.feedback_service

    @app.route("/api/events/<event_id>/register", methods=["POST"], endpoint="event_register")
    def event_register(event_id: str):
        data = json_body()
        registration = registrations.register(
            event_id,
            student_id=data.get("student_id"),
            roll_no=data.get("roll_no"),
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
        )
        return json_ok(201, message="Registration successful", registration=registration.to_dict())

    @app.route("/api/registrations/search", methods=["GET"], endpoint="registrations_search")
    def registrations_search():
        found = registrations.search_by_email(request.args.get("email"))
        return json_ok(registrations=[r.to_dict() for r in found])

    @app.route("/api/registrations/<registration_id>/details", methods=["GET"], endpoint="registration_details")
    def registration_details(registration_id: str):
        details, event = registrations.get_details(registration_id)
        return json_ok(registration=details.to_dict(), event=event.to_dict() if event else None)

    @app.route(
        "/api/registrations/<registration_id>/feedback-status", methods=["GET"], endpoint="registration_feedback_status"
    )
    def registration_feedback_status(registration_id: str):
        existing = feedback.feedback_status(registration_id)
        return json_ok(has_feedback=existing is not None, feedback=existing.to_dict() if existing else None)

    @app.route("/api/admin/events/<event_id>", methods=["GET"], endpoint="admin_event_detail")
    @admin_token_required
    def admin_event_detail(event_id: str):
        summary, roster = registrations.roster(event_id)
        event = summary.to_dict()
        event["registrations"] = [entry.to_dict() for entry in roster]
        return json_ok(event=event)

    @app.route("/api/admin/events/<event_id>/registrations", methods=["GET"], endpoint="admin_event_registrations")
    @admin_token_required
    def admin_event_registrations(event_id: str):
        summary, roster = registrations.roster(event_id)
        return json_ok(event=summary.to_dict(), registrations=[entry.to_dict() for entry in roster])
