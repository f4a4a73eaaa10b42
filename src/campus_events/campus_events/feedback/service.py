from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_utc
from ..common.transaction import Transaction
from ..common.validators import FieldErrors
from ..core.constants import MAX_COMMENT_LENGTH, MAX_RATING, MIN_RATING
from ..core.exceptions import AlreadySubmittedError, DuplicateKeyError, NotFoundError
from ..registrations.repository import RegistrationRepository
from .model import Feedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)


class FeedbackService:
    def __init__(
        self,
        registrations: RegistrationRepository,
        feedback: FeedbackRepository,
        *,
        transaction: Transaction,
    ):
        self._registrations = registrations
        self._feedback = feedback
        self._transaction = transaction

    def submit_feedback(
        self,
        registration_id: str,
        rating: Any,
        comment: Any = None,
        *,
        now: Optional[datetime] = None,
    ) -> Feedback:
        """Store the one and only feedback of a registration.

        Over-long comments are rejected, not clipped.
        """

        errors = FieldErrors()
        rating_value = errors.integer(rating, "rating", required=True, min_value=MIN_RATING, max_value=MAX_RATING)
        comment_value = errors.string(comment, "comment", max_len=MAX_COMMENT_LENGTH)
        errors.raise_if_any()
        now = now or now_utc()

        with self._transaction():
            if not self._registrations.get_by_id(registration_id):
                raise NotFoundError("Registration not found")

            existing = self._feedback.get_by_registration(registration_id)
            if existing:
                raise AlreadySubmittedError(existing)

            try:
                feedback = self._feedback.create(
                    registration_id=registration_id,
                    rating=int(rating_value),
                    comment=comment_value,
                    submitted_at=now,
                )
            except DuplicateKeyError:
                existing = self._feedback.get_by_registration(registration_id)
                if existing is None:
                    raise
                raise AlreadySubmittedError(existing)

        logger.info("Feedback %s stored for registration %s (rating=%d)", feedback.feedback_id, registration_id, feedback.rating)
        return feedback

    def feedback_status(self, registration_id: str) -> Optional[Feedback]:
        return self._feedback.get_by_registration(registration_id)
