from __future__ import annotations

from typing import Any, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations.

    ``details`` is a list of human readable, field-level messages.
    ``payload`` is merged into the JSON error body (e.g. the existing record
    for a duplicate submission).
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Sequence[str]] = None,
        payload: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = list(details) if details else []
        self.payload = dict(payload) if payload else {}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class EventCancelledError(ValidationError):
    def __init__(self):
        super().__init__("Event has been cancelled")


class RegistrationClosedError(ValidationError):
    def __init__(self):
        super().__init__("Registration closed - event has started")


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class EventFullError(ConflictError):
    def __init__(self):
        super().__init__("Event is full")


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str):
        super().__init__("Email already exists", details=[f"email: {email} is already registered"])
        self.email = email


class AlreadyRegisteredError(ConflictError):
    def __init__(self, registration):
        super().__init__(
            "Already registered for this event",
            payload={"registration": registration.to_dict()},
        )
        self.registration = registration


class AlreadySubmittedError(ConflictError):
    def __init__(self, feedback):
        super().__init__("Feedback already submitted", payload={"feedback": feedback.to_dict()})
        self.feedback = feedback


class AuthenticationError(DomainError):
    """Raised when the admin credential is missing."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when the admin credential is wrong."""

    status_code = 403


class DuplicateKeyError(Exception):
    """Storage-level unique index violation.

    Repositories raise it; services translate it into a domain conflict.
    """
