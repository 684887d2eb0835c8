"""Pytest configuration and shared fixtures."""

import pytest
from rest_framework.test import APIClient

from factories import make_event, make_participant
from settlements.domain import Participant
from settlements.services.dispatch import LedgerDispatcher
from settlements.services.event_service import EventService
from settlements.services.settlement_service import SettlementService
from settlements.services.wallet_service import WalletService
from settlements.stores.memory_store import (
    InMemoryEventStore,
    InMemoryPaymentRequestStore,
    InMemorySessionStore,
    InMemoryWalletStore,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def organizer() -> Participant:
    return make_participant("John Doe", has_paid=True)


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def request_store() -> InMemoryPaymentRequestStore:
    return InMemoryPaymentRequestStore()


@pytest.fixture
def wallet_store() -> InMemoryWalletStore:
    return InMemoryWalletStore()


@pytest.fixture
def event_service(event_store) -> EventService:
    return EventService(event_store)


@pytest.fixture
def settlement_service(event_service, request_store) -> SettlementService:
    return SettlementService(
        events=event_service,
        sessions=InMemorySessionStore(),
        dispatcher=LedgerDispatcher(request_store),
    )


@pytest.fixture
def wallet_service(wallet_store, request_store, event_service) -> WalletService:
    return WalletService(wallet_store, request_store, event_service)


@pytest.fixture
def doubles_match(event_store, organizer):
    """A 60.00 event with the paid organizer and three unpaid players."""
    event = make_event("60.00")
    players = [make_participant(n) for n in ("Sarah Williams", "David Brown", "Emily Davis")]
    event_store.add(event, [organizer, *players])
    return event, players
