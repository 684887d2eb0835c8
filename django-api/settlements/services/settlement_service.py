"""Settlement service - drives a settlement session from event choice to submission.

Each public method loads the session, applies one transition, saves it and
returns it. Validation failures surface as domain errors before anything is
dispatched.
"""

import logging
from uuid import uuid4

from settlements.domain import (
    Money,
    ParticipantId,
    PaymentRequest,
    SessionId,
    SettlementCalculator,
    SettlementSession,
    SplitMethod,
)
from settlements.domain.errors import (
    DispatchFailedError,
    DomainError,
    InvalidSessionIdError,
    ParticipantNotFoundError,
    SessionNotFoundError,
)
from settlements.services.dispatch import PaymentRequestDispatcher
from settlements.services.event_service import EventService
from settlements.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for splitting an event's cost and requesting payment."""

    def __init__(
        self,
        events: EventService,
        sessions: SessionStore,
        dispatcher: PaymentRequestDispatcher,
        calculator: SettlementCalculator | None = None,
    ) -> None:
        self._events = events
        self._sessions = sessions
        self._dispatcher = dispatcher
        self._calculator = calculator or SettlementCalculator()

    def start(self, event_id: str) -> SettlementSession:
        """Open a session for an event with its roster split equally.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        session = SettlementSession(id=SessionId(uuid4()), calculator=self._calculator)
        self._select(session, event_id)
        logger.info("Settlement session %s started for event %s", session.id, event_id)
        return session

    def get(self, session_id: str) -> SettlementSession:
        """Return a session by ID.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist or has expired.
        """
        try:
            sid = SessionId.from_string(session_id)
        except (ValueError, AttributeError, TypeError) as exc:
            raise InvalidSessionIdError() from exc
        session = self._sessions.get(sid)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def select_event(self, session_id: str, event_id: str) -> SettlementSession:
        session = self.get(session_id)
        self._select(session, event_id)
        return session

    def toggle_participant(self, session_id: str, participant_id: str) -> SettlementSession:
        session = self.get(session_id)
        session.toggle_participant(_parse_participant_id(participant_id))
        self._sessions.save(session)
        return session

    def confirm_participants(self, session_id: str) -> SettlementSession:
        session = self.get(session_id)
        session.confirm_participants()
        self._sessions.save(session)
        return session

    def choose_split_method(self, session_id: str, method: SplitMethod) -> SettlementSession:
        session = self.get(session_id)
        session.choose_split_method(method)
        self._sessions.save(session)
        return session

    def set_custom_amount(self, session_id: str, participant_id: str, amount: str) -> SettlementSession:
        session = self.get(session_id)
        pid = _parse_participant_id(participant_id)
        session.set_custom_amount(pid, amount)
        try:
            Money.parse(amount)
        except ValueError:
            logger.warning(
                "Custom amount %r for participant %s in session %s was treated as 0",
                amount,
                participant_id,
                session_id,
            )
        self._sessions.save(session)
        return session

    def submit(self, session_id: str) -> list[PaymentRequest]:
        """Validate the session and send its payment requests.

        Raises:
            NoParticipantsSelectedError: If nobody billable is selected.
            SplitMismatchError: If custom amounts do not reconcile with the cost.
            ZeroAmountRequestedError: If custom amounts sum to zero.
            DispatchFailedError: If the requests could not be sent.
        """
        session = self.get(session_id)
        lines = session.finalize()
        try:
            issued = self._dispatcher.dispatch(session.id, session.event, lines)
        except DomainError:
            raise
        except Exception as exc:
            logger.exception("Dispatch failed for settlement session %s", session.id)
            raise DispatchFailedError() from exc
        session.mark_submitted()
        self._sessions.save(session)
        logger.info(
            "Settlement session %s submitted: %d payment request(s) for %s",
            session.id,
            len(issued),
            session.requested,
        )
        return issued

    def _select(self, session: SettlementSession, event_id: str) -> None:
        event = self._events.get_event(event_id)
        session.select_event(event, self._events.get_participants(event_id))
        self._sessions.save(session)


def _parse_participant_id(participant_id: str) -> ParticipantId:
    try:
        return ParticipantId.from_string(participant_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise ParticipantNotFoundError(str(participant_id)) from exc
