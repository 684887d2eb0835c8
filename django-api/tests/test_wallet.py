"""Unit tests for WalletService.

Run with: pytest tests/test_wallet.py -v
"""

import pytest

from settlements.domain import Money, PaymentRequestStatus, SplitMethod, TransactionStatus, TransactionType
from settlements.domain.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRecipientError,
    PaymentRequestAlreadyPaidError,
    PaymentRequestNotFoundError,
)


@pytest.fixture
def issued_requests(settlement_service, doubles_match):
    event, _ = doubles_match
    sid = str(settlement_service.start(str(event.id)).id)
    settlement_service.confirm_participants(sid)
    settlement_service.choose_split_method(sid, SplitMethod.EQUAL)
    return settlement_service.submit(sid)


class TestDepositWithdraw:
    """Tests for wallet top-ups and withdrawals."""

    def test_deposit(self, wallet_service):
        wallet = wallet_service.deposit("sarah@example.com", "100")
        assert wallet.balance == Money.of("100.00")
        assert wallet.transactions[0].type is TransactionType.DEPOSIT
        assert wallet.transactions[0].status is TransactionStatus.COMPLETED

    @pytest.mark.parametrize("amount", ["0", "-10", "ten", "", "1e11", "1e30", "100000000"])
    def test_deposit_invalid_amount(self, wallet_service, amount):
        with pytest.raises(InvalidAmountError):
            wallet_service.deposit("sarah@example.com", amount)

    def test_withdraw_is_pending_and_debited(self, wallet_service):
        wallet_service.deposit("sarah@example.com", "150.75")
        wallet = wallet_service.withdraw("sarah@example.com", "30")
        assert wallet.balance == Money.of("120.75")
        assert wallet.transactions[0].status is TransactionStatus.PENDING

    def test_withdraw_more_than_balance(self, wallet_service):
        wallet_service.deposit("sarah@example.com", "10")
        with pytest.raises(InsufficientBalanceError):
            wallet_service.withdraw("sarah@example.com", "10.50")
        assert wallet_service.get_wallet("sarah@example.com").balance == Money.of("10.00")


class TestTransfer:
    """Tests for wallet-to-wallet transfers."""

    def test_transfer_moves_money(self, wallet_service):
        wallet_service.deposit("sarah@example.com", "50")
        sender = wallet_service.transfer("sarah@example.com", "david@example.com", "7.50", "Shuttlecocks")
        assert sender.balance == Money.of("42.50")
        receiver = wallet_service.get_wallet("david@example.com")
        assert receiver.balance == Money.of("7.50")
        assert receiver.transactions[0].description == "Shuttlecocks"

    @pytest.mark.parametrize("recipient", ["", "sarah@example.com"])
    def test_transfer_needs_another_recipient(self, wallet_service, recipient):
        wallet_service.deposit("sarah@example.com", "50")
        with pytest.raises(InvalidRecipientError):
            wallet_service.transfer("sarah@example.com", recipient, "5")

    def test_transfer_more_than_balance(self, wallet_service):
        with pytest.raises(InsufficientBalanceError):
            wallet_service.transfer("sarah@example.com", "david@example.com", "5")


class TestPayRequest:
    """Tests for paying an issued payment request."""

    def test_pay_request_settles_share(self, wallet_service, request_store, event_service, issued_requests, doubles_match):
        event, players = doubles_match
        request = issued_requests[0]
        wallet_service.deposit(players[0].email, "20")

        wallet = wallet_service.pay_request(str(request.id))

        assert wallet.balance == Money.of("5.00")
        assert wallet.transactions[0].type is TransactionType.PAYMENT
        assert wallet_service.get_wallet(event.organizer_email).balance == Money.of("15.00")
        assert request_store.get_request(request.id).status is PaymentRequestStatus.PAID
        roster = event_service.get_participants(str(event.id))
        assert next(p for p in roster if p.id == players[0].id).has_paid

    def test_paying_twice_is_rejected(self, wallet_service, issued_requests, doubles_match):
        _, players = doubles_match
        wallet_service.deposit(players[0].email, "50")
        wallet_service.pay_request(str(issued_requests[0].id))
        with pytest.raises(PaymentRequestAlreadyPaidError):
            wallet_service.pay_request(str(issued_requests[0].id))

    def test_insufficient_balance_leaves_request_pending(self, wallet_service, request_store, issued_requests):
        request = issued_requests[1]
        with pytest.raises(InsufficientBalanceError):
            wallet_service.pay_request(str(request.id))
        assert request_store.get_request(request.id).status is PaymentRequestStatus.PENDING

    @pytest.mark.parametrize("request_id", ["bogus", "3f2b8c1e-0000-4000-8000-000000000000"])
    def test_unknown_request(self, wallet_service, request_id):
        with pytest.raises(PaymentRequestNotFoundError):
            wallet_service.pay_request(request_id)
