from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_utc
from ..common.qr import render_qr_png
from ..common.transaction import Transaction
from ..common.validators import FieldErrors
from ..core.enums import CheckInMethod
from ..core.exceptions import DuplicateKeyError, NotFoundError
from ..registrations.model import Registration
from ..registrations.repository import RegistrationRepository
from .model import Attendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Self-service check-in and admin attendance marking.

    A registration has at most one attendance row. Check-in never changes an
    existing row; marking overwrites it in place.
    """

    def __init__(
        self,
        registrations: RegistrationRepository,
        attendance: AttendanceRepository,
        *,
        transaction: Transaction,
        public_base_url: str = "",
    ):
        self._registrations = registrations
        self._attendance = attendance
        self._transaction = transaction
        self._public_base_url = public_base_url.rstrip("/")

    def _require_registration(self, registration_id: str) -> Registration:
        registration = self._registrations.get_by_id(registration_id)
        if not registration:
            raise NotFoundError("Registration not found")
        return registration

    def check_in(
        self,
        registration_id: str,
        *,
        method: Any = None,
        now: Optional[datetime] = None,
    ) -> tuple[Attendance, bool]:
        """Mark the registration present. Returns ``(attendance, created)``."""

        errors = FieldErrors()
        checkin_method = errors.choice(method, "method", CheckInMethod) or CheckInMethod.MANUAL
        errors.raise_if_any()
        now = now or now_utc()

        with self._transaction():
            self._require_registration(registration_id)

            existing = self._attendance.get_by_registration(registration_id)
            if existing:
                return existing, False

            try:
                record = self._attendance.create(registration_id=registration_id, checked_in_at=now, present=True)
            except DuplicateKeyError:
                # A concurrent check-in won the insert; theirs is the record.
                existing = self._attendance.get_by_registration(registration_id)
                if existing is None:
                    raise
                return existing, False

        logger.info("Checked in registration %s via %s", registration_id, checkin_method.value)
        return record, True

    def mark_attendance(self, registration_id: str, present: Any, *, now: Optional[datetime] = None) -> Attendance:
        errors = FieldErrors()
        flag = errors.boolean(present, "present")
        errors.raise_if_any("Present status must be true or false")
        now = now or now_utc()

        with self._transaction():
            self._require_registration(registration_id)
            record = self._attendance.upsert(registration_id=registration_id, checked_in_at=now, present=bool(flag))

        logger.info("Marked registration %s as %s", registration_id, record.status.value)
        return record

    def checkin_url(self, registration_id: str) -> str:
        return f"{self._public_base_url}/api/registrations/{registration_id}/checkin"

    def checkin_qr_png(self, registration_id: str) -> bytes:
        self._require_registration(registration_id)
        return render_qr_png(self.checkin_url(registration_id))
