"""Calendar service - Business logic for calendar events."""

from __future__ import annotations

from noruno.models import CalendarEvent, CalendarEventInput, CalendarEventUpdate
from noruno.models.base import utc_now
from noruno.services.collection import EntityCollection, apply_update


class CalendarService:
    """Service for calendar events. Recurrence rules are stored, never expanded."""

    def __init__(self, events: EntityCollection[CalendarEvent]):
        self.events = events

    async def load(self) -> None:
        await self.events.load()

    async def list_events(self) -> list[CalendarEvent]:
        return await self.events.list()

    async def get_event(self, event_id: str) -> CalendarEvent | None:
        return await self.events.get(event_id)

    async def create_event(self, event_data: CalendarEventInput) -> list[CalendarEvent]:
        return await self.events.add(CalendarEvent(**event_data.model_dump()))

    async def update_event(
        self, event_id: str, updates: CalendarEventUpdate
    ) -> list[CalendarEvent]:
        """Apply the set fields of updates. created_at is preserved."""

        def mutate(event: CalendarEvent) -> CalendarEvent:
            updated = apply_update(event, updates)
            updated.updated_at = utc_now()
            return updated

        return await self.events.modify(event_id, mutate)

    async def delete_event(self, event_id: str) -> list[CalendarEvent]:
        return await self.events.remove(event_id)

    async def events_between(
        self, start: str | None = None, end: str | None = None
    ) -> list[CalendarEvent]:
        """Events whose start date falls within [start, end].

        Bounds are "YYYY-MM-DD" strings compared against the date prefix of
        ``start_datetime``; either bound may be omitted.
        """
        events = await self.events.list()
        return [
            event
            for event in events
            if (start is None or event.start_datetime[:10] >= start)
            and (end is None or event.start_datetime[:10] <= end)
        ]
