from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.transaction import Transaction
from ..common.validators import FieldErrors
from ..core.constants import NEW_STUDENT_SENTINEL
from ..core.enums import EventStatus
from ..core.exceptions import (
    AlreadyRegisteredError,
    DuplicateEmailError,
    DuplicateKeyError,
    EventCancelledError,
    EventFullError,
    NotFoundError,
    RegistrationClosedError,
    ValidationError,
)
from ..events.model import Event, EventSummary
from ..events.repository import EventRepository
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import Registration, RegistrationDetails, RegistrationLookup, RosterEntry
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentContact:
    """Validated contact fields sent with a registration."""

    name: Optional[str]
    email: Optional[str]
    roll_no: Optional[str]
    phone: Optional[str]


class RegistrationService:
    """Use case: register a student for an event, and look registrations up.

    The whole registration runs in one transaction. The event row is locked
    first, so concurrent registrations for the same event queue behind each
    other and the capacity check cannot go stale before the insert.
    """

    def __init__(
        self,
        events: EventRepository,
        students: StudentRepository,
        registrations: RegistrationRepository,
        *,
        transaction: Transaction,
    ):
        self._events = events
        self._students = students
        self._registrations = registrations
        self._transaction = transaction

    @staticmethod
    def is_new_student_ref(student_id: Optional[str]) -> bool:
        return not student_id or not str(student_id).strip() or student_id == NEW_STUDENT_SENTINEL

    @staticmethod
    def _validate_contact(
        *,
        name: Any,
        email: Any,
        roll_no: Any,
        phone: Any,
    ) -> StudentContact:
        errors = FieldErrors()
        contact = StudentContact(
            name=errors.string(name, "name", required=True, min_len=2, max_len=100),
            email=errors.email(email, "email", required=True),
            roll_no=errors.string(roll_no, "roll_no", max_len=50),
            phone=errors.phone(phone, "phone"),
        )
        errors.raise_if_any()
        return contact

    def register(
        self,
        event_id: str,
        *,
        student_id: Optional[str] = None,
        roll_no: Optional[str] = None,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Registration:
        now = now or now_utc()
        new_student = self.is_new_student_ref(student_id)
        # An existing student is referenced by id alone; contact fields are ignored.
        contact = (
            self._validate_contact(name=name, email=email, roll_no=roll_no, phone=phone)
            if new_student
            else None
        )

        with self._transaction():
            event = self._events.get_for_update(event_id)
            if not event:
                raise NotFoundError("Event not found")
            if event.status == EventStatus.CANCELLED:
                raise EventCancelledError()
            if now >= event.start_time:
                raise RegistrationClosedError()

            student: Optional[Student] = None
            if not new_student:
                student = self._students.get_by_id(str(student_id).strip())
                if not student:
                    raise NotFoundError("Student not found")
                existing = self._registrations.get_for_event_and_student(event.event_id, student.student_id)
                if existing:
                    raise AlreadyRegisteredError(existing)

            if not event.is_unlimited:
                registered = self._events.count_registered(event.event_id)
                if registered >= event.capacity:
                    logger.info("Event %s is full (%d/%d)", event.event_id, registered, event.capacity)
                    raise EventFullError()

            if student is None:
                student = self._create_student(event, contact, now)

            try:
                registration = self._registrations.create(
                    event_id=event.event_id,
                    student_id=student.student_id,
                    registered_at=now,
                )
            except DuplicateKeyError:
                existing = self._registrations.get_for_event_and_student(event.event_id, student.student_id)
                if existing is None:
                    raise
                raise AlreadyRegisteredError(existing)

        logger.info(
            "Registered student %s for event %s (registration %s)",
            registration.student_id,
            registration.event_id,
            registration.registration_id,
        )
        return registration

    def _create_student(self, event: Event, contact: StudentContact, now: datetime) -> Student:
        if self._students.get_by_email(contact.email):
            raise DuplicateEmailError(contact.email)
        try:
            student = self._students.create(
                college_id=event.college_id,
                name=contact.name,
                email=contact.email,
                roll_no=contact.roll_no,
                phone=contact.phone,
                created_at=now,
            )
        except DuplicateKeyError:
            raise DuplicateEmailError(contact.email)

        logger.info("Created student %s (%s) for college %s", student.student_id, student.email, student.college_id)
        return student

    def search_by_email(self, email: Optional[str]) -> Sequence[RegistrationLookup]:
        if not email or not email.strip():
            raise ValidationError("Email parameter is required", details=["email: is required"])
        return self._registrations.search_by_email(email.strip().lower())

    def get_details(self, registration_id: str) -> tuple[RegistrationDetails, Optional[EventSummary]]:
        details = self._registrations.get_details(registration_id)
        if not details:
            raise NotFoundError("Registration not found")
        return details, self._events.get_summary(details.registration.event_id)

    def roster(self, event_id: str) -> tuple[EventSummary, Sequence[RosterEntry]]:
        summary = self._events.get_summary(event_id)
        if not summary:
            raise NotFoundError("Event not found")
        return summary, self._registrations.roster_for_event(event_id)
