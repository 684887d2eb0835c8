"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext

from settlements.domain import (
    Event,
    EventId,
    Participant,
    ParticipantId,
    PaymentRequest,
    PaymentRequestId,
    PaymentRequestLine,
    SessionId,
    SettlementSession,
    Transaction,
    Wallet,
)


class EventStore(ABC):
    """Read interface over events and their participant rosters."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by date ascending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def get_participants(self, event_id: EventId) -> list[Participant]:
        """Return a snapshot of the event's roster in display order."""
        ...

    @abstractmethod
    def mark_participant_paid(self, event_id: EventId, participant_id: ParticipantId) -> None:
        ...


class SessionStore(ABC):
    """Interface for transient settlement session state."""

    @abstractmethod
    def get(self, session_id: SessionId) -> SettlementSession | None:
        ...

    @abstractmethod
    def save(self, session: SettlementSession) -> None:
        ...


class PaymentRequestStore(ABC):
    """Interface for the payment request ledger."""

    @abstractmethod
    def create_requests(
        self, session_id: SessionId, event_id: EventId, lines: tuple[PaymentRequestLine, ...]
    ) -> list[PaymentRequest]:
        """Create one pending request per line.

        Requests already issued for the same session and participant are
        returned unchanged instead of being duplicated.
        """
        ...

    @abstractmethod
    def get_request(self, request_id: PaymentRequestId, for_update: bool = False) -> PaymentRequest | None:
        """Return a request by ID, or None; for_update locks it until the enclosing unit of work ends."""
        ...

    @abstractmethod
    def list_for_session(self, session_id: SessionId) -> list[PaymentRequest]:
        ...

    @abstractmethod
    def mark_paid(self, request_id: PaymentRequestId) -> PaymentRequest:
        ...


class WalletStore(ABC):
    """Interface for wallet balances and transactions."""

    @abstractmethod
    def get_wallet(self, owner: str, for_update: bool = False) -> Wallet:
        """Return the owner's wallet; an empty one if it does not exist yet.

        for_update locks the balance until the enclosing unit of work ends.
        """
        ...

    @abstractmethod
    def record(self, wallet: Wallet, transaction: Transaction) -> None:
        """Persist the wallet's new balance together with the transaction that produced it."""
        ...

    def record_many(self, entries: list[tuple[Wallet, Transaction]]) -> None:
        """Persist several wallet movements as one unit."""
        for wallet, transaction in entries:
            self.record(wallet, transaction)

    def atomic(self):
        """Context manager grouping reads and writes across stores into one unit of work.

        Transactional stores discard every write made in the block when it
        raises; stores without transactions run the block as is.
        """
        return nullcontext()
