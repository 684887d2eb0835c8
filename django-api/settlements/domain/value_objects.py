"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Self
from uuid import UUID

CENT = Decimal("0.01")

# Largest amounts the ledger columns hold (max_digits=10 and 12, two decimal places).
MAX_AMOUNT = Decimal("99999999.99")
MAX_BALANCE = Decimal("9999999999.99")


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ParticipantId:
    """Unique identifier for a Participant within an event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a settlement session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PaymentRequestId:
    """Unique identifier for an issued payment request."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Non-negative currency amount held to the cent."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: Decimal | int | str) -> Self:
        """Build from a trusted value, rounding half-up to the cent.

        Raises:
            ValueError: If the value is negative or too large to hold to the cent.
        """
        try:
            amount = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValueError(f"Amount out of range: {value!r}") from exc
        return cls(amount=amount)

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0.00"))

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse user input strictly.

        Raises:
            ValueError: If the text is not a finite non-negative number no larger
                than MAX_AMOUNT.
        """
        try:
            value = Decimal(str(text).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a number: {text!r}") from exc
        if not value.is_finite():
            raise ValueError(f"Not a finite number: {text!r}")
        if value > MAX_AMOUNT:
            raise ValueError(f"Amount too large: {text!r}")
        return cls.of(value)

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


class SplitMethod(Enum):
    """How an event's cost is divided between participants."""

    EQUAL = "equal"
    CUSTOM = "custom"
