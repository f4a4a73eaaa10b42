from __future__ import annotations

from flask import Flask

from ..common.http import json_body, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    feedback = container.feedback_service

    @app.route("/api/registrations/<registration_id>/feedback", methods=["POST"], endpoint="registration_feedback")
    def registration_feedback(registration_id: str):
        data = json_body()
        submitted = feedback.submit_feedback(registration_id, data.get("rating"), data.get("comment"))
        return json_ok(201, message="Feedback submitted successfully", feedback=submitted.to_dict())
