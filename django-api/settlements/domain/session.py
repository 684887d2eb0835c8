"""Settlement session: one organizer splitting one event's cost.

The session walks SELECTING_EVENT -> SELECTING_PARTICIPANTS ->
CHOOSING_SPLIT_METHOD -> READY -> SUBMITTED. Edits made while READY keep
the session READY; only an explicit submit moves it to SUBMITTED, which is
terminal.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable

from settlements.domain.calculator import SettlementCalculator, requested_total
from settlements.domain.errors import (
    DomainError,
    ErrorCode,
    InsufficientParticipantsError,
    InvalidStateTransitionError,
    SessionClosedError,
)
from settlements.domain.models import Event, Participant, PaymentRequestLine, Roster
from settlements.domain.value_objects import Money, ParticipantId, SessionId, SplitMethod


class SessionState(Enum):
    SELECTING_EVENT = "selecting_event"
    SELECTING_PARTICIPANTS = "selecting_participants"
    CHOOSING_SPLIT_METHOD = "choosing_split_method"
    READY = "ready"
    SUBMITTED = "submitted"


@dataclass
class SettlementSession:
    """Mutable working state of a settlement flow."""

    id: SessionId
    state: SessionState = SessionState.SELECTING_EVENT
    event: Event | None = None
    participants: Roster = field(default_factory=dict)
    split_method: SplitMethod = SplitMethod.EQUAL
    notice: DomainError | None = None
    calculator: SettlementCalculator = field(default_factory=SettlementCalculator)

    @property
    def requested(self) -> Money:
        return requested_total(self.participants)

    @property
    def remaining(self) -> Decimal:
        """Cost left uncovered by requests; negative when over-requested."""
        if self.event is None:
            return Decimal("0.00")
        return self.event.total_cost.amount - self.requested.amount

    def readiness(self) -> DomainError | None:
        """The error a submit would fail with right now, if any."""
        if self.event is None:
            return None
        return self.calculator.validate(self.event.total_cost, self.participants, self.split_method)

    def select_event(self, event: Event, roster: Iterable[Participant]) -> None:
        self._ensure_open()
        self.event = event
        self.participants = {p.id: p for p in roster}
        self.split_method = SplitMethod.EQUAL
        self.state = SessionState.SELECTING_PARTICIPANTS
        self._recompute()

    def toggle_participant(self, participant_id: ParticipantId) -> None:
        self._ensure_in("toggle a participant", SessionState.SELECTING_PARTICIPANTS,
                        SessionState.CHOOSING_SPLIT_METHOD, SessionState.READY)
        self.participants = self.calculator.toggle(self.participants, participant_id)
        self._recompute()

    def confirm_participants(self) -> None:
        self._ensure_in("confirm participants", SessionState.SELECTING_PARTICIPANTS)
        self.state = SessionState.CHOOSING_SPLIT_METHOD

    def choose_split_method(self, method: SplitMethod) -> None:
        self._ensure_in("choose a split method", SessionState.CHOOSING_SPLIT_METHOD, SessionState.READY)
        self.split_method = method
        self.state = SessionState.READY
        self._recompute()

    def set_custom_amount(self, participant_id: ParticipantId, amount: str) -> None:
        self._ensure_in("set a custom amount", SessionState.READY)
        if self.split_method is not SplitMethod.CUSTOM:
            raise InvalidStateTransitionError("set a custom amount", "using an equal split")
        self.participants = self.calculator.set_custom_amount(self.participants, participant_id, amount)

    def finalize(self) -> tuple[PaymentRequestLine, ...]:
        """Validate and return the lines to dispatch; the state is not changed."""
        self._ensure_in("submit", SessionState.READY)
        return self.calculator.validate_and_submit(
            self.event.total_cost, self.participants, self.split_method
        )

    def mark_submitted(self) -> None:
        self._ensure_in("submit", SessionState.READY)
        self.state = SessionState.SUBMITTED

    def _recompute(self) -> None:
        self.notice = None
        if self.split_method is not SplitMethod.EQUAL:
            return
        try:
            self.participants = self.calculator.compute_equal_split(
                self.event.total_cost, self.participants
            )
        except InsufficientParticipantsError as exc:
            self.participants = self.calculator.clear_amounts(self.participants)
            self.notice = exc

    def __getstate__(self) -> dict:
        state = dict(self.__dict__)
        if self.notice is not None:
            state["notice"] = (self.notice.code.value, self.notice.message)
        return state

    def __setstate__(self, state: dict) -> None:
        notice = state.get("notice")
        if notice is not None:
            code, message = notice
            state["notice"] = DomainError(code=ErrorCode(code), message=message)
        self.__dict__.update(state)

    def _ensure_open(self) -> None:
        if self.state is SessionState.SUBMITTED:
            raise SessionClosedError()

    def _ensure_in(self, operation: str, *states: SessionState) -> None:
        self._ensure_open()
        if self.state not in states:
            raise InvalidStateTransitionError(operation, self.state.value)
