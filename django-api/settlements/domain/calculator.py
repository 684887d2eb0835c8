"""Settlement arithmetic: equal and custom splits of an event's cost.

Every function here is a pure function of (total cost, roster, split method).
Rosters are never mutated in place; each operation returns a new mapping in
the same insertion order as its input.
"""

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from settlements.domain.errors import (
    DomainError,
    InsufficientParticipantsError,
    NoParticipantsSelectedError,
    ParticipantAlreadyPaidError,
    ParticipantNotFoundError,
    SplitMismatchError,
    ZeroAmountRequestedError,
)
from settlements.domain.models import Participant, PaymentRequestLine, Roster
from settlements.domain.value_objects import CENT, Money, ParticipantId, SplitMethod

# The organizer pays one share of the cost and is never billed for it.
ORGANIZER_SHARES_COST = True

SPLIT_TOLERANCE = Decimal("0.01")


def parse_custom_amount(text: str) -> Money:
    """Lenient form-input parsing.

    Anything that is not a non-negative number no larger than MAX_AMOUNT is 0.
    """
    try:
        return Money.parse(text)
    except ValueError:
        return Money.zero()


def billable(participants: Mapping[ParticipantId, Participant]) -> list[Participant]:
    return [p for p in participants.values() if p.is_billable]


def requested_total(participants: Mapping[ParticipantId, Participant]) -> Money:
    return sum((p.amount_due for p in billable(participants)), Money.zero())


class SettlementCalculator:
    """Computes and validates what each participant owes for a shared cost."""

    def __init__(
        self,
        organizer_shares_cost: bool = ORGANIZER_SHARES_COST,
        tolerance: Decimal = SPLIT_TOLERANCE,
    ) -> None:
        self.organizer_shares_cost = organizer_shares_cost
        self.tolerance = tolerance

    def equal_share(self, total_cost: Money, billable_count: int) -> Money:
        """Return one participant's share of an equal split.

        Raises:
            InsufficientParticipantsError: If nobody is billable.
        """
        if billable_count < 1:
            raise InsufficientParticipantsError()
        shares = billable_count + (1 if self.organizer_shares_cost else 0)
        return Money((total_cost.amount / shares).quantize(CENT, rounding=ROUND_HALF_UP))

    def compute_equal_split(
        self, total_cost: Money, participants: Mapping[ParticipantId, Participant]
    ) -> Roster:
        """Rewrite every participant's amount due under an equal split.

        Raises:
            InsufficientParticipantsError: If no participant is selected and unpaid.
        """
        share = self.equal_share(total_cost, len(billable(participants)))
        return {
            pid: replace(p, amount_due=share if p.is_billable else Money.zero())
            for pid, p in participants.items()
        }

    def clear_amounts(self, participants: Mapping[ParticipantId, Participant]) -> Roster:
        return {pid: replace(p, amount_due=Money.zero()) for pid, p in participants.items()}

    def toggle(self, participants: Mapping[ParticipantId, Participant], participant_id: ParticipantId) -> Roster:
        """Flip one unpaid participant's selection.

        Raises:
            ParticipantNotFoundError: If the id is not on the roster.
            ParticipantAlreadyPaidError: If the participant has paid.
        """
        participant = self._billable_candidate(participants, participant_id)
        roster = dict(participants)
        roster[participant_id] = replace(participant, selected=not participant.selected)
        return roster

    def set_custom_amount(
        self,
        participants: Mapping[ParticipantId, Participant],
        participant_id: ParticipantId,
        amount: str,
    ) -> Roster:
        """Set one participant's amount, leaving every other participant untouched.

        Raises:
            ParticipantNotFoundError: If the id is not on the roster.
            ParticipantAlreadyPaidError: If the participant has paid.
        """
        participant = self._billable_candidate(participants, participant_id)
        roster = dict(participants)
        roster[participant_id] = replace(participant, amount_due=parse_custom_amount(amount))
        return roster

    def validate(
        self,
        total_cost: Money,
        participants: Mapping[ParticipantId, Participant],
        split_method: SplitMethod,
    ) -> DomainError | None:
        """Return the first reason the roster cannot be submitted, or None."""
        if not billable(participants):
            return NoParticipantsSelectedError()
        if split_method is SplitMethod.CUSTOM:
            requested = requested_total(participants)
            delta = total_cost.amount - requested.amount
            if abs(delta) > self.tolerance:
                return SplitMismatchError(delta)
            if requested.amount <= 0:
                return ZeroAmountRequestedError()
        return None

    def validate_and_submit(
        self,
        total_cost: Money,
        participants: Mapping[ParticipantId, Participant],
        split_method: SplitMethod,
    ) -> tuple[PaymentRequestLine, ...]:
        """Return the payment request lines for every billable participant.

        Nothing is returned unless every check passes.

        Raises:
            NoParticipantsSelectedError: If nobody billable is selected.
            SplitMismatchError: If custom amounts do not reconcile with the cost.
            ZeroAmountRequestedError: If custom amounts sum to zero.
        """
        error = self.validate(total_cost, participants, split_method)
        if error is not None:
            raise error
        if split_method is SplitMethod.EQUAL:
            participants = self.compute_equal_split(total_cost, participants)
        return tuple(PaymentRequestLine(p.id, p.amount_due) for p in billable(participants))

    def _billable_candidate(
        self, participants: Mapping[ParticipantId, Participant], participant_id: ParticipantId
    ) -> Participant:
        participant = participants.get(participant_id)
        if participant is None:
            raise ParticipantNotFoundError(str(participant_id))
        if participant.has_paid:
            raise ParticipantAlreadyPaidError(str(participant_id))
        return participant
