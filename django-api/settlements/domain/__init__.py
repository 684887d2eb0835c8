from settlements.domain.calculator import SettlementCalculator
from settlements.domain.models import Event, Participant, PaymentRequest, PaymentRequestLine, PaymentRequestStatus
from settlements.domain.session import SessionState, SettlementSession
from settlements.domain.value_objects import EventId, Money, ParticipantId, PaymentRequestId, SessionId, SplitMethod
from settlements.domain.wallet import Transaction, TransactionStatus, TransactionType, Wallet

__all__ = [
    "Event",
    "Participant",
    "PaymentRequest",
    "PaymentRequestLine",
    "PaymentRequestStatus",
    "SettlementCalculator",
    "SettlementSession",
    "SessionState",
    "EventId",
    "ParticipantId",
    "PaymentRequestId",
    "SessionId",
    "Money",
    "SplitMethod",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "Wallet",
]
