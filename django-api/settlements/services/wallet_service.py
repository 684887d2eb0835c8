"""Wallet service - deposits, withdrawals, transfers and paying payment requests.

Every balance change runs inside the wallet store's unit of work with the
affected wallets locked, so a failure part-way leaves no money moved.
"""

import logging

from django.utils import timezone

from settlements.domain import PaymentRequestId, PaymentRequestStatus, TransactionStatus, TransactionType, Wallet
from settlements.domain.errors import (
    InvalidRecipientError,
    PaymentRequestAlreadyPaidError,
    PaymentRequestNotFoundError,
)
from settlements.domain.wallet import parse_amount
from settlements.services.event_service import EventService
from settlements.stores.interfaces import PaymentRequestStore, WalletStore

logger = logging.getLogger(__name__)


class WalletService:
    """Service for wallet ledger operations."""

    def __init__(self, wallets: WalletStore, requests: PaymentRequestStore, events: EventService) -> None:
        self._wallets = wallets
        self._requests = requests
        self._events = events

    def get_wallet(self, owner: str) -> Wallet:
        return self._wallets.get_wallet(owner)

    def deposit(self, owner: str, amount: str) -> Wallet:
        """Top up a wallet.

        Raises:
            InvalidAmountError: If the amount is not a positive number, or the
                balance would outgrow the ledger.
        """
        money = parse_amount(amount)
        with self._wallets.atomic():
            wallet, entry = self._wallets.get_wallet(owner, for_update=True).credit(
                money, TransactionType.DEPOSIT, "Wallet top-up", timezone.now()
            )
            self._wallets.record(wallet, entry)
        logger.info("Deposited %s into wallet %s", money, owner)
        return wallet

    def withdraw(self, owner: str, amount: str) -> Wallet:
        """Withdraw to a bank account; the balance drops now, the transaction stays pending.

        Raises:
            InvalidAmountError: If the amount is not a positive number.
            InsufficientBalanceError: If the wallet cannot cover the amount.
        """
        money = parse_amount(amount)
        with self._wallets.atomic():
            wallet, entry = self._wallets.get_wallet(owner, for_update=True).debit(
                money,
                TransactionType.WITHDRAWAL,
                "Withdrawal to bank account",
                timezone.now(),
                status=TransactionStatus.PENDING,
            )
            self._wallets.record(wallet, entry)
        logger.info("Withdrawal of %s from wallet %s is pending", money, owner)
        return wallet

    def transfer(self, owner: str, recipient: str, amount: str, note: str = "") -> Wallet:
        """Move money from one wallet to another.

        Raises:
            InvalidAmountError: If the amount is not a positive number.
            InvalidRecipientError: If the recipient is missing or is the sender.
            InsufficientBalanceError: If the sender cannot cover the amount.
        """
        if not recipient or recipient == owner:
            raise InvalidRecipientError()
        money = parse_amount(amount)
        now = timezone.now()
        with self._wallets.atomic():
            wallets = self._lock_wallets(owner, recipient)
            sender, sent = wallets[owner].debit(
                money, TransactionType.TRANSFER, note or f"Transfer to {recipient}", now
            )
            receiver, received = wallets[recipient].credit(
                money, TransactionType.TRANSFER, note or f"Transfer from {owner}", now
            )
            self._wallets.record_many([(sender, sent), (receiver, received)])
        logger.info("Transferred %s from %s to %s", money, owner, recipient)
        return sender

    def pay_request(self, request_id: str) -> Wallet:
        """Pay a pending payment request from the participant's wallet to the organizer's.

        The status check, both balance changes and marking the request and the
        participant paid commit together or not at all.

        Raises:
            PaymentRequestNotFoundError: If the request does not exist.
            PaymentRequestAlreadyPaidError: If the request is no longer pending.
            InvalidRecipientError: If the payer is the organizer.
            InsufficientBalanceError: If the payer cannot cover the amount.
        """
        try:
            rid = PaymentRequestId.from_string(request_id)
        except (ValueError, AttributeError, TypeError) as exc:
            raise PaymentRequestNotFoundError(str(request_id)) from exc

        with self._wallets.atomic():
            request = self._requests.get_request(rid, for_update=True)
            if request is None:
                raise PaymentRequestNotFoundError(request_id)
            if request.status is not PaymentRequestStatus.PENDING:
                raise PaymentRequestAlreadyPaidError()

            event = self._events.get_event(str(request.event_id))
            payer = next(
                p for p in self._events.get_participants(str(event.id)) if p.id == request.participant_id
            )
            if payer.email == event.organizer_email:
                raise InvalidRecipientError()

            now = timezone.now()
            wallets = self._lock_wallets(payer.email, event.organizer_email)
            payer_wallet, paid = wallets[payer.email].debit(
                request.amount, TransactionType.PAYMENT, f"Share of {event.title}", now
            )
            organizer_wallet, received = wallets[event.organizer_email].credit(
                request.amount, TransactionType.TRANSFER, f"{payer.name} paid for {event.title}", now
            )
            self._wallets.record_many([(payer_wallet, paid), (organizer_wallet, received)])
            self._requests.mark_paid(rid)
            self._events.mark_participant_paid(event.id, payer.id)
        logger.info("Payment request %s paid by %s", request_id, payer.email)
        return payer_wallet

    def _lock_wallets(self, *owners: str) -> dict[str, Wallet]:
        # Always lock in owner order.
        return {owner: self._wallets.get_wallet(owner, for_update=True) for owner in sorted(set(owners))}
