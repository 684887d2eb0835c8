"""Wallet ledger: balances and the transactions that moved them."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from settlements.domain.errors import InsufficientBalanceError, InvalidAmountError
from settlements.domain.value_objects import MAX_BALANCE, Money


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    PAYMENT = "payment"
    REFUND = "refund"
    TRANSFER = "transfer"


class TransactionStatus(Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class Transaction:
    """A single balance movement, positive or negative depending on type."""

    id: UUID
    type: TransactionType
    amount: Money
    description: str
    status: TransactionStatus
    created_at: datetime


@dataclass(frozen=True)
class Wallet:
    """A user's balance with its transactions, newest first."""

    owner: str
    balance: Money
    transactions: tuple[Transaction, ...] = ()

    def credit(
        self,
        amount: Money,
        type: TransactionType,
        description: str,
        now: datetime,
    ) -> tuple["Wallet", Transaction]:
        """Put money into the wallet.

        Raises:
            InvalidAmountError: If the amount is zero or the balance would exceed MAX_BALANCE.
        """
        _require_positive(amount)
        if self.balance.amount + amount.amount > MAX_BALANCE:
            raise InvalidAmountError()
        transaction = Transaction(uuid4(), type, amount, description, TransactionStatus.COMPLETED, now)
        return self._record(self.balance + amount, transaction), transaction

    def debit(
        self,
        amount: Money,
        type: TransactionType,
        description: str,
        now: datetime,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> tuple["Wallet", Transaction]:
        """Take money out of the wallet.

        Raises:
            InvalidAmountError: If the amount is zero.
            InsufficientBalanceError: If the balance cannot cover the amount.
        """
        _require_positive(amount)
        if amount.amount > self.balance.amount:
            raise InsufficientBalanceError()
        transaction = Transaction(uuid4(), type, amount, description, status, now)
        return self._record(self.balance - amount, transaction), transaction

    def _record(self, balance: Money, transaction: Transaction) -> "Wallet":
        return replace(self, balance=balance, transactions=(transaction, *self.transactions))


def parse_amount(text: str) -> Money:
    """Strictly parse a wallet amount; it must be a positive number no larger than MAX_AMOUNT.

    Raises:
        InvalidAmountError: If the text is not such a number.
    """
    try:
        amount = Money.parse(text)
    except ValueError as exc:
        raise InvalidAmountError() from exc
    _require_positive(amount)
    return amount


def _require_positive(amount: Money) -> None:
    if amount.amount <= 0:
        raise InvalidAmountError()
