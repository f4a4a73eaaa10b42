from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event, EventFilters, EventSummary


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def get_for_update(self, event_id: str) -> Optional[Event]:
        """Load the event and lock its row until the current transaction ends.

        Registrations for the same event serialize on this lock, which is what
        keeps the capacity check and the insert atomic.
        """

        raise NotImplementedError

    def get_summary(self, event_id: str) -> Optional[EventSummary]:
        """Event with college name, registered count and present count."""

        raise NotImplementedError

    def create(self, event: Event) -> Event:
        raise NotImplementedError

    def update(self, event: Event) -> None:
        raise NotImplementedError

    def delete(self, event_id: str) -> bool:
        """Hard delete; registrations, attendance and feedback cascade."""

        raise NotImplementedError

    def list_public(self, filters: EventFilters) -> Sequence[EventSummary]:
        """Ordered by start_time ascending."""

        raise NotImplementedError

    def list_admin(self, filters: EventFilters) -> Sequence[EventSummary]:
        """Ordered by created_at descending."""

        raise NotImplementedError

    def count_registered(self, event_id: str) -> int:
        raise NotImplementedError
