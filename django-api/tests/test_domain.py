"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import pickle
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from factories import make_event, make_participant
from settlements.domain import EventId, Money, SessionId, SettlementSession, TransactionStatus, TransactionType, Wallet
from settlements.domain.errors import (
    ErrorCode,
    InsufficientBalanceError,
    InvalidAmountError,
    SplitMismatchError,
)
from settlements.domain.value_objects import MAX_AMOUNT, MAX_BALANCE
from settlements.domain.wallet import parse_amount

NOW = datetime(2025, 3, 20, 18, 0, tzinfo=timezone.utc)


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money.zero().amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("15"))) == "15.00"

    def test_of_rounds_half_up(self):
        """Half a cent rounds away from zero."""
        assert Money.of("16.665").amount == Decimal("16.67")
        assert Money.of("16.664").amount == Decimal("16.66")

    def test_parse_rejects_garbage(self):
        """Strict parsing refuses non-numbers."""
        for text in ("abc", "", "nan", "Infinity"):
            with pytest.raises(ValueError):
                Money.parse(text)

    @pytest.mark.parametrize("text", ["1e30", "100000000", "1e11", "9" * 40])
    def test_parse_rejects_amounts_beyond_the_ledger(self, text):
        """Amounts the 10-digit amount columns cannot hold are refused."""
        with pytest.raises(ValueError):
            Money.parse(text)

    def test_parse_accepts_largest_amount(self):
        assert Money.parse("99999999.99").amount == MAX_AMOUNT

    def test_of_raises_value_error_when_too_large_to_quantize(self):
        """Overflowing the decimal context surfaces as ValueError, not InvalidOperation."""
        with pytest.raises(ValueError):
            Money.of("1e30")


class TestEventId:
    """Tests for EventId value object."""

    def test_from_string_valid_uuid(self):
        """EventId.from_string parses valid UUID."""
        value = uuid4()
        assert EventId.from_string(str(value)).value == value

    def test_from_string_invalid_uuid(self):
        """EventId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            EventId.from_string("not-a-uuid")


class TestDomainError:
    """Tests for the structured error payloads."""

    def test_split_mismatch_carries_delta(self):
        error = SplitMismatchError(Decimal("5.00"))
        assert error.code is ErrorCode.SPLIT_MISMATCH
        assert error.delta == Decimal("5.00")
        assert "5.00" in error.message

    def test_str_includes_code(self):
        assert str(InsufficientBalanceError()) == "INSUFFICIENT_BALANCE: Insufficient balance"


class TestWallet:
    """Tests for wallet ledger arithmetic."""

    def test_credit_adds_completed_transaction(self):
        wallet = Wallet(owner="sarah@example.com", balance=Money.zero())
        wallet, entry = wallet.credit(Money.of("100"), TransactionType.DEPOSIT, "Wallet top-up", NOW)
        assert wallet.balance == Money.of("100")
        assert entry.status is TransactionStatus.COMPLETED
        assert wallet.transactions == (entry,)

    def test_debit_beyond_balance_raises(self):
        wallet = Wallet(owner="sarah@example.com", balance=Money.of("10"))
        with pytest.raises(InsufficientBalanceError):
            wallet.debit(Money.of("10.01"), TransactionType.WITHDRAWAL, "Withdrawal", NOW)

    def test_debit_of_whole_balance_is_allowed(self):
        wallet = Wallet(owner="sarah@example.com", balance=Money.of("10"))
        wallet, _ = wallet.debit(Money.of("10"), TransactionType.PAYMENT, "Share", NOW)
        assert wallet.balance == Money.zero()

    def test_newest_transaction_first(self):
        wallet = Wallet(owner="sarah@example.com", balance=Money.zero())
        wallet, first = wallet.credit(Money.of("5"), TransactionType.DEPOSIT, "one", NOW)
        wallet, second = wallet.credit(Money.of("7"), TransactionType.DEPOSIT, "two", NOW)
        assert wallet.transactions == (second, first)

    def test_parse_amount_requires_positive_number(self):
        for text in ("0", "-4", "abc", ""):
            with pytest.raises(InvalidAmountError):
                parse_amount(text)
        assert parse_amount("25.5") == Money.of("25.50")

    @pytest.mark.parametrize("text", ["1e11", "1e30", "100000000"])
    def test_parse_amount_rejects_oversized_amounts(self, text):
        with pytest.raises(InvalidAmountError):
            parse_amount(text)

    def test_credit_beyond_balance_limit_raises(self):
        wallet = Wallet(owner="sarah@example.com", balance=Money(MAX_BALANCE))
        with pytest.raises(InvalidAmountError):
            wallet.credit(Money.of("0.01"), TransactionType.DEPOSIT, "Wallet top-up", NOW)


class TestSessionPickling:
    """Sessions are stored in the cache and must survive pickling."""

    def test_notice_survives_round_trip(self):
        player = make_participant("Sarah Williams", selected=False)
        session = SettlementSession(id=SessionId(uuid4()))
        session.select_event(make_event("60.00"), [player])

        restored = pickle.loads(pickle.dumps(session))

        assert restored.notice.code is ErrorCode.INSUFFICIENT_PARTICIPANTS
        assert restored.participants == session.participants
        assert restored.state is session.state
