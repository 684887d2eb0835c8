"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in settlements/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from settlements.domain.value_objects import EventId, Money, ParticipantId, PaymentRequestId, SessionId


@dataclass(frozen=True)
class Event:
    """Domain representation of an organizer's event."""

    id: EventId
    title: str
    date: date
    court_name: str
    business_name: str
    organizer_email: str
    total_cost: Money


@dataclass(frozen=True)
class Participant:
    """One person's stake in an event's cost."""

    id: ParticipantId
    name: str
    email: str
    has_paid: bool = False
    selected: bool = True
    amount_due: Money = Money.zero()

    @property
    def is_billable(self) -> bool:
        """Selected and not yet paid."""
        return self.selected and not self.has_paid


Roster = dict[ParticipantId, Participant]


@dataclass(frozen=True)
class PaymentRequestLine:
    """A finalized amount to request from one participant."""

    participant_id: ParticipantId
    amount_due: Money


class PaymentRequestStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PaymentRequest:
    """A payment request issued to a participant when a session is submitted."""

    id: PaymentRequestId
    session_id: SessionId
    event_id: EventId
    participant_id: ParticipantId
    amount: Money
    status: PaymentRequestStatus
    created_at: datetime
