"""Unit tests for EventService and SettlementService.

These test error handling and domain error mapping against in-memory stores.
Run with: pytest tests/test_services.py -v
"""

import logging
from uuid import uuid4

import pytest

from settlements.domain import Money, PaymentRequestLine, PaymentRequestStatus, SessionId, SessionState, SplitMethod
from settlements.domain.errors import (
    DispatchFailedError,
    EventNotFoundError,
    InvalidEventIdError,
    InvalidSessionIdError,
    NoParticipantsSelectedError,
    ParticipantNotFoundError,
    SessionClosedError,
    SessionNotFoundError,
    SplitMismatchError,
)
from settlements.services.dispatch import LedgerDispatcher, PaymentRequestDispatcher
from settlements.services.settlement_service import SettlementService
from settlements.stores.memory_store import InMemorySessionStore


class FailingDispatcher(PaymentRequestDispatcher):
    def __init__(self) -> None:
        self.calls = 0

    def dispatch(self, session_id, event, lines):
        self.calls += 1
        raise ConnectionError("notification gateway unavailable")


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self, event_service):
        """get_event raises InvalidEventIdError for malformed UUID."""
        with pytest.raises(InvalidEventIdError):
            event_service.get_event("42")

    def test_get_event_not_found_raises_error(self, event_service):
        """get_event raises EventNotFoundError when store returns None."""
        with pytest.raises(EventNotFoundError):
            event_service.get_event(str(uuid4()))

    def test_get_participants_event_not_found_raises_error(self, event_service):
        """get_participants raises EventNotFoundError when the event doesn't exist."""
        with pytest.raises(EventNotFoundError):
            event_service.get_participants(str(uuid4()))

    def test_get_participants_returns_roster_in_order(self, event_service, doubles_match, organizer):
        event, players = doubles_match
        roster = event_service.get_participants(str(event.id))
        assert [p.name for p in roster] == [organizer.name, *(p.name for p in players)]


class TestSettlementService:
    """Tests for SettlementService."""

    def test_start_splits_equally(self, settlement_service, doubles_match):
        event, players = doubles_match
        session = settlement_service.start(str(event.id))
        assert session.state is SessionState.SELECTING_PARTICIPANTS
        assert [session.participants[p.id].amount_due for p in players] == [Money.of("15.00")] * 3

    def test_start_with_unknown_event(self, settlement_service):
        with pytest.raises(EventNotFoundError):
            settlement_service.start(str(uuid4()))

    def test_get_invalid_session_id(self, settlement_service):
        with pytest.raises(InvalidSessionIdError):
            settlement_service.get("session-1")

    def test_get_unknown_session(self, settlement_service):
        with pytest.raises(SessionNotFoundError):
            settlement_service.get(str(uuid4()))

    def test_toggle_unknown_participant(self, settlement_service, doubles_match):
        event, _ = doubles_match
        session = settlement_service.start(str(event.id))
        with pytest.raises(ParticipantNotFoundError):
            settlement_service.toggle_participant(str(session.id), "not-a-uuid")

    def test_submit_equal_split_issues_requests(self, settlement_service, request_store, doubles_match):
        event, players = doubles_match
        sid = str(settlement_service.start(str(event.id)).id)
        settlement_service.confirm_participants(sid)
        settlement_service.choose_split_method(sid, SplitMethod.EQUAL)

        issued = settlement_service.submit(sid)

        assert [r.participant_id for r in issued] == [p.id for p in players]
        assert {r.amount for r in issued} == {Money.of("15.00")}
        assert all(r.status is PaymentRequestStatus.PENDING for r in issued)
        assert settlement_service.get(sid).state is SessionState.SUBMITTED

    def test_submit_custom_split(self, settlement_service, doubles_match):
        event, players = doubles_match
        sid = str(settlement_service.start(str(event.id)).id)
        settlement_service.toggle_participant(sid, str(players[2].id))
        settlement_service.confirm_participants(sid)
        settlement_service.choose_split_method(sid, SplitMethod.CUSTOM)
        settlement_service.set_custom_amount(sid, str(players[0].id), "45.00")
        settlement_service.set_custom_amount(sid, str(players[1].id), "15.00")

        issued = settlement_service.submit(sid)

        assert [(r.participant_id, r.amount) for r in issued] == [
            (players[0].id, Money.of("45.00")),
            (players[1].id, Money.of("15.00")),
        ]

    def test_mismatch_leaves_session_ready(self, settlement_service, request_store, doubles_match):
        event, players = doubles_match
        sid = str(settlement_service.start(str(event.id)).id)
        settlement_service.confirm_participants(sid)
        settlement_service.choose_split_method(sid, SplitMethod.CUSTOM)
        settlement_service.set_custom_amount(sid, str(players[0].id), "1.00")

        with pytest.raises(SplitMismatchError):
            settlement_service.submit(sid)

        assert settlement_service.get(sid).state is SessionState.READY
        assert request_store.list_for_session(settlement_service.get(sid).id) == []

    def test_nothing_selected_is_rejected(self, settlement_service, doubles_match):
        event, players = doubles_match
        sid = str(settlement_service.start(str(event.id)).id)
        for player in players:
            settlement_service.toggle_participant(sid, str(player.id))
        settlement_service.confirm_participants(sid)
        settlement_service.choose_split_method(sid, SplitMethod.EQUAL)
        with pytest.raises(NoParticipantsSelectedError):
            settlement_service.submit(sid)

    def test_resubmitting_is_rejected(self, settlement_service, doubles_match):
        event, _ = doubles_match
        sid = str(settlement_service.start(str(event.id)).id)
        settlement_service.confirm_participants(sid)
        settlement_service.choose_split_method(sid, SplitMethod.EQUAL)
        settlement_service.submit(sid)
        with pytest.raises(SessionClosedError):
            settlement_service.submit(sid)

    def test_dispatch_failure_is_reported_and_retryable(self, event_service, doubles_match, caplog):
        event, _ = doubles_match
        dispatcher = FailingDispatcher()
        service = SettlementService(events=event_service, sessions=InMemorySessionStore(), dispatcher=dispatcher)
        sid = str(service.start(str(event.id)).id)
        service.confirm_participants(sid)
        service.choose_split_method(sid, SplitMethod.EQUAL)

        with caplog.at_level(logging.ERROR, logger="settlements"):
            with pytest.raises(DispatchFailedError):
                service.submit(sid)

        assert service.get(sid).state is SessionState.READY
        assert "Dispatch failed" in caplog.text
        with pytest.raises(DispatchFailedError):
            service.submit(sid)
        assert dispatcher.calls == 2

    def test_coerced_custom_amount_is_logged(self, settlement_service, doubles_match, caplog):
        event, players = doubles_match
        sid = str(settlement_service.start(str(event.id)).id)
        settlement_service.confirm_participants(sid)
        settlement_service.choose_split_method(sid, SplitMethod.CUSTOM)

        with caplog.at_level(logging.WARNING, logger="settlements"):
            session = settlement_service.set_custom_amount(sid, str(players[0].id), "twelve")

        assert session.participants[players[0].id].amount_due == Money.zero()
        assert "treated as 0" in caplog.text


class TestLedgerDispatcher:
    """Tests for idempotent request creation."""

    def test_redispatch_does_not_duplicate(self, request_store, doubles_match):
        event, players = doubles_match
        dispatcher = LedgerDispatcher(request_store)
        session_id = SessionId(uuid4())
        lines = tuple(PaymentRequestLine(p.id, Money.of("15.00")) for p in players)

        first = dispatcher.dispatch(session_id, event, lines)
        second = dispatcher.dispatch(session_id, event, lines)

        assert [r.id for r in first] == [r.id for r in second]
        assert len(request_store.list_for_session(session_id)) == 3
