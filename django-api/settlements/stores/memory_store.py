"""In-memory store implementations used for demos and unit tests."""

from dataclasses import replace
from uuid import uuid4

from django.utils import timezone

from settlements.domain import (
    Event,
    EventId,
    Money,
    Participant,
    ParticipantId,
    PaymentRequest,
    PaymentRequestId,
    PaymentRequestLine,
    PaymentRequestStatus,
    SessionId,
    SettlementSession,
    Transaction,
    Wallet,
)
from settlements.stores.interfaces import EventStore, PaymentRequestStore, SessionStore, WalletStore


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}
        self._rosters: dict[EventId, dict[ParticipantId, Participant]] = {}

    def add(self, event: Event, participants: list[Participant]) -> None:
        self._events[event.id] = event
        self._rosters[event.id] = {p.id: p for p in participants}

    def list_events(self) -> list[Event]:
        return sorted(self._events.values(), key=lambda e: e.date)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def get_participants(self, event_id: EventId) -> list[Participant]:
        return list(self._rosters.get(event_id, {}).values())

    def mark_participant_paid(self, event_id: EventId, participant_id: ParticipantId) -> None:
        roster = self._rosters[event_id]
        roster[participant_id] = replace(roster[participant_id], has_paid=True, selected=False)


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self._sessions: dict[SessionId, SettlementSession] = {}

    def get(self, session_id: SessionId) -> SettlementSession | None:
        return self._sessions.get(session_id)

    def save(self, session: SettlementSession) -> None:
        self._sessions[session.id] = session


class InMemoryPaymentRequestStore(PaymentRequestStore):
    def __init__(self) -> None:
        self._requests: dict[PaymentRequestId, PaymentRequest] = {}

    def create_requests(
        self, session_id: SessionId, event_id: EventId, lines: tuple[PaymentRequestLine, ...]
    ) -> list[PaymentRequest]:
        issued = {r.participant_id: r for r in self.list_for_session(session_id)}
        requests = []
        for line in lines:
            request = issued.get(line.participant_id)
            if request is None:
                request = PaymentRequest(
                    id=PaymentRequestId(uuid4()),
                    session_id=session_id,
                    event_id=event_id,
                    participant_id=line.participant_id,
                    amount=line.amount_due,
                    status=PaymentRequestStatus.PENDING,
                    created_at=timezone.now(),
                )
                self._requests[request.id] = request
            requests.append(request)
        return requests

    def get_request(self, request_id: PaymentRequestId, for_update: bool = False) -> PaymentRequest | None:
        return self._requests.get(request_id)

    def list_for_session(self, session_id: SessionId) -> list[PaymentRequest]:
        return [r for r in self._requests.values() if r.session_id == session_id]

    def mark_paid(self, request_id: PaymentRequestId) -> PaymentRequest:
        request = replace(self._requests[request_id], status=PaymentRequestStatus.PAID)
        self._requests[request_id] = request
        return request


class InMemoryWalletStore(WalletStore):
    def __init__(self) -> None:
        self._wallets: dict[str, Wallet] = {}

    def get_wallet(self, owner: str, for_update: bool = False) -> Wallet:
        return self._wallets.get(owner) or Wallet(owner=owner, balance=Money.zero())

    def record(self, wallet: Wallet, transaction: Transaction) -> None:
        self._wallets[wallet.owner] = wallet
