"""Django ORM implementations of the stores.

Event rosters are read-through cached; signals.py drops the keys when the
underlying rows change.
"""

import logging

from django.conf import settings
from django.core.cache import cache
from django.db import IntegrityError, transaction

from settlements import models
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
    Transaction,
    TransactionStatus,
    TransactionType,
    Wallet,
)
from settlements.stores.interfaces import EventStore, PaymentRequestStore, WalletStore

logger = logging.getLogger(__name__)

EVENT_LIST_KEY = "events:list"


def event_key(event_id) -> str:
    return f"events:{event_id}"


def participants_key(event_id) -> str:
    return f"events:{event_id}:participants"


def _to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        date=row.date,
        court_name=row.court_name,
        business_name=row.business_name,
        organizer_email=row.organizer_email,
        total_cost=Money.of(row.total_cost),
    )


def _to_participant(row: models.Participant) -> Participant:
    return Participant(
        id=ParticipantId(row.id),
        name=row.name,
        email=row.email,
        has_paid=row.has_paid,
        selected=not row.has_paid,
    )


def _to_request(row: models.PaymentRequest) -> PaymentRequest:
    return PaymentRequest(
        id=PaymentRequestId(row.id),
        session_id=SessionId(row.session_id),
        event_id=EventId(row.event_id),
        participant_id=ParticipantId(row.participant_id),
        amount=Money.of(row.amount),
        status=PaymentRequestStatus(row.status),
        created_at=row.created_at,
    )


def _to_transaction(row: models.WalletTransaction) -> Transaction:
    return Transaction(
        id=row.id,
        type=TransactionType(row.type),
        amount=Money.of(row.amount),
        description=row.description,
        status=TransactionStatus(row.status),
        created_at=row.created_at,
    )


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def list_events(self) -> list[Event]:
        return cache.get_or_set(
            EVENT_LIST_KEY,
            lambda: [_to_event(row) for row in models.Event.objects.all()],
            settings.EVENT_CACHE_TTL,
        )

    def get_event(self, event_id: EventId) -> Event | None:
        key = event_key(event_id)
        event = cache.get(key)
        if event is None:
            row = models.Event.objects.filter(pk=event_id.value).first()
            if row is None:
                return None
            event = _to_event(row)
            cache.set(key, event, settings.EVENT_CACHE_TTL)
        return event

    def get_participants(self, event_id: EventId) -> list[Participant]:
        return cache.get_or_set(
            participants_key(event_id),
            lambda: [
                _to_participant(row)
                for row in models.Participant.objects.filter(event_id=event_id.value)
            ],
            settings.EVENT_CACHE_TTL,
        )

    def mark_participant_paid(self, event_id: EventId, participant_id: ParticipantId) -> None:
        row = models.Participant.objects.get(pk=participant_id.value, event_id=event_id.value)
        row.has_paid = True
        row.save(update_fields=["has_paid"])


class DjangoPaymentRequestStore(PaymentRequestStore):
    def create_requests(
        self, session_id: SessionId, event_id: EventId, lines: tuple[PaymentRequestLine, ...]
    ) -> list[PaymentRequest]:
        rows = []
        with transaction.atomic():
            for line in lines:
                row, created = models.PaymentRequest.objects.get_or_create(
                    session_id=session_id.value,
                    participant_id=line.participant_id.value,
                    defaults={"event_id": event_id.value, "amount": line.amount_due.amount},
                )
                if not created:
                    logger.info(
                        "Payment request %s already issued for session %s", row.id, session_id
                    )
                rows.append(row)
        return [_to_request(row) for row in rows]

    def get_request(self, request_id: PaymentRequestId, for_update: bool = False) -> PaymentRequest | None:
        rows = models.PaymentRequest.objects.select_for_update() if for_update else models.PaymentRequest.objects
        row = rows.filter(pk=request_id.value).first()
        return _to_request(row) if row else None

    def list_for_session(self, session_id: SessionId) -> list[PaymentRequest]:
        return [
            _to_request(row)
            for row in models.PaymentRequest.objects.filter(session_id=session_id.value)
        ]

    def mark_paid(self, request_id: PaymentRequestId) -> PaymentRequest:
        row = models.PaymentRequest.objects.get(pk=request_id.value)
        row.status = models.PaymentRequest.Status.PAID
        row.save(update_fields=["status"])
        return _to_request(row)


class DjangoWalletStore(WalletStore):
    def get_wallet(self, owner: str, for_update: bool = False) -> Wallet:
        if for_update:
            # The row must exist to be locked.
            row, _ = models.Wallet.objects.select_for_update().get_or_create(owner=owner)
        else:
            row = models.Wallet.objects.filter(pk=owner).first()
            if row is None:
                return Wallet(owner=owner, balance=Money.zero())
        return Wallet(
            owner=owner,
            balance=Money.of(row.balance),
            transactions=tuple(_to_transaction(t) for t in row.transactions.all()),
        )

    def record(self, wallet: Wallet, transaction_: Transaction) -> None:
        try:
            with transaction.atomic():
                row, _ = models.Wallet.objects.update_or_create(
                    owner=wallet.owner, defaults={"balance": wallet.balance.amount}
                )
                models.WalletTransaction.objects.create(
                    id=transaction_.id,
                    wallet=row,
                    type=transaction_.type.value,
                    amount=transaction_.amount.amount,
                    description=transaction_.description,
                    status=transaction_.status.value,
                    created_at=transaction_.created_at,
                )
        except IntegrityError:
            logger.exception("Failed to record transaction %s for %s", transaction_.id, wallet.owner)
            raise

    def record_many(self, entries: list[tuple[Wallet, Transaction]]) -> None:
        with transaction.atomic():
            for wallet, transaction_ in entries:
                self.record(wallet, transaction_)

    def atomic(self):
        return transaction.atomic()
