"""Event service - read access to events and their rosters.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from settlements.domain import Event, EventId, Participant, ParticipantId
from settlements.domain.errors import EventNotFoundError, InvalidEventIdError
from settlements.stores.interfaces import EventStore


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidEventIdError() from exc


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def get_participants(self, event_id: str) -> list[Participant]:
        """Return the roster for an event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(event_id)
        return self._store.get_participants(event.id)

    def mark_participant_paid(self, event_id: EventId, participant_id: ParticipantId) -> None:
        self._store.mark_participant_paid(event_id, participant_id)
