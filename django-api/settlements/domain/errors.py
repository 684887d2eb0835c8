"""Domain error codes for the settlements module."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INSUFFICIENT_PARTICIPANTS = "INSUFFICIENT_PARTICIPANTS"
    NO_PARTICIPANTS_SELECTED = "NO_PARTICIPANTS_SELECTED"
    SPLIT_MISMATCH = "SPLIT_MISMATCH"
    ZERO_AMOUNT_REQUESTED = "ZERO_AMOUNT_REQUESTED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"
    PARTICIPANT_ALREADY_PAID = "PARTICIPANT_ALREADY_PAID"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"
    SESSION_CLOSED = "SESSION_CLOSED"
    DISPATCH_FAILED = "DISPATCH_FAILED"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    PAYMENT_REQUEST_NOT_FOUND = "PAYMENT_REQUEST_NOT_FOUND"
    PAYMENT_REQUEST_ALREADY_PAID = "PAYMENT_REQUEST_ALREADY_PAID"
    INVALID_RECIPIENT = "INVALID_RECIPIENT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InsufficientParticipantsError(DomainError):
    """Raised when an equal split has nobody to charge."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_PARTICIPANTS,
            message="You need to select at least one participant to share expenses.",
        )


class NoParticipantsSelectedError(DomainError):
    """Raised when a submission has no selected unpaid participant."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_PARTICIPANTS_SELECTED,
            message="Please select at least one participant",
        )


class SplitMismatchError(DomainError):
    """Raised when custom amounts do not add up to the event cost."""

    def __init__(self, delta: Decimal) -> None:
        super().__init__(
            code=ErrorCode.SPLIT_MISMATCH,
            message=f"Total requested amount must equal the event cost (off by {abs(delta):.2f})",
        )
        object.__setattr__(self, "delta", delta)


class ZeroAmountRequestedError(DomainError):
    """Raised when custom amounts add up to nothing."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ZERO_AMOUNT_REQUESTED,
            message="Total requested amount must be greater than 0",
        )


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        object.__setattr__(self, "event_id", event_id)


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class SessionNotFoundError(DomainError):
    """Raised when a settlement session has expired or never existed."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Settlement session not found",
        )
        object.__setattr__(self, "session_id", session_id)


class InvalidSessionIdError(DomainError):
    """Raised when a session ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SESSION_ID,
            message="Invalid session ID format",
        )


class ParticipantNotFoundError(DomainError):
    """Raised when a participant is not on the event roster."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(
            code=ErrorCode.PARTICIPANT_NOT_FOUND,
            message="Participant not found",
        )
        object.__setattr__(self, "participant_id", participant_id)


class ParticipantAlreadyPaidError(DomainError):
    """Raised when a paid participant is included in a split change."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(
            code=ErrorCode.PARTICIPANT_ALREADY_PAID,
            message="Participant has already paid",
        )
        object.__setattr__(self, "participant_id", participant_id)


class InvalidStateTransitionError(DomainError):
    """Raised when a session operation is attempted out of order."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATE_TRANSITION,
            message=f"Cannot {operation} while session is {state}",
        )


class SessionClosedError(DomainError):
    """Raised when a submitted session is modified."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SESSION_CLOSED,
            message="Payment requests were already sent for this session",
        )


class DispatchFailedError(DomainError):
    """Raised when payment requests could not be sent."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DISPATCH_FAILED,
            message="Failed to send payment requests. Please try again.",
        )


class InvalidAmountError(DomainError):
    """Raised when a wallet amount is not a positive number."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_AMOUNT,
            message="Please enter a valid amount",
        )


class InsufficientBalanceError(DomainError):
    """Raised when a wallet cannot cover a debit."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_BALANCE,
            message="Insufficient balance",
        )


class PaymentRequestNotFoundError(DomainError):
    """Raised when a payment request is not found."""

    def __init__(self, request_id: str) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_REQUEST_NOT_FOUND,
            message="Payment request not found",
        )
        object.__setattr__(self, "request_id", request_id)


class PaymentRequestAlreadyPaidError(DomainError):
    """Raised when a payment request is settled twice."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_REQUEST_ALREADY_PAID,
            message="Payment request is already paid",
        )


class InvalidRecipientError(DomainError):
    """Raised when a transfer has no usable recipient."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RECIPIENT,
            message="Please select a recipient",
        )
