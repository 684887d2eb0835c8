"""API views for settlement sessions, wallets and payment requests.

Views validate input shape with serializers and hand everything else to the
services. DomainError is rendered as {"error": {"code", "message"}} with the
status from ERROR_STATUS.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from settlements.domain.errors import DomainError, ErrorCode, SplitMismatchError
from settlements.handlers.serializers import (
    AmountSerializer,
    CustomAmountSerializer,
    EventSerializer,
    PaymentRequestSerializer,
    SettlementSessionSerializer,
    SplitMethodSerializer,
    StartSessionSerializer,
    TransferSerializer,
    WalletSerializer,
)
from settlements.services.dispatch import LedgerDispatcher
from settlements.services.event_service import EventService
from settlements.services.settlement_service import SettlementService
from settlements.services.wallet_service import WalletService
from settlements.stores.cache_store import CacheSessionStore
from settlements.stores.django_store import DjangoEventStore, DjangoPaymentRequestStore, DjangoWalletStore

ERROR_STATUS = {
    ErrorCode.INSUFFICIENT_PARTICIPANTS: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.NO_PARTICIPANTS_SELECTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SPLIT_MISMATCH: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.ZERO_AMOUNT_REQUESTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INSUFFICIENT_BALANCE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PARTICIPANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PAYMENT_REQUEST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SESSION_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RECIPIENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PARTICIPANT_ALREADY_PAID: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATE_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.SESSION_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.PAYMENT_REQUEST_ALREADY_PAID: status.HTTP_409_CONFLICT,
    ErrorCode.DISPATCH_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    if isinstance(error, SplitMismatchError):
        body["delta"] = f"{error.delta:.2f}"
    return Response({"error": body}, status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST))


def event_service() -> EventService:
    return EventService(DjangoEventStore())


def settlement_service() -> SettlementService:
    return SettlementService(
        events=event_service(),
        sessions=CacheSessionStore(),
        dispatcher=LedgerDispatcher(DjangoPaymentRequestStore()),
    )


def wallet_service() -> WalletService:
    return WalletService(DjangoWalletStore(), DjangoPaymentRequestStore(), event_service())


class DomainAPIView(APIView):
    """Renders domain errors as structured error bodies."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


def session_response(session, status_code: int = status.HTTP_200_OK) -> Response:
    return Response(SettlementSessionSerializer(session).data, status=status_code)


class EventListView(DomainAPIView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        events = event_service().list_events()
        return Response(EventSerializer(events, many=True).data)


class SettlementStartView(DomainAPIView):
    """Handler for POST /api/settlements"""

    def post(self, request: Request) -> Response:
        serializer = StartSessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = settlement_service().start(serializer.validated_data["event_id"])
        return session_response(session, status.HTTP_201_CREATED)


class SettlementDetailView(DomainAPIView):
    """Handler for GET /api/settlements/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        return session_response(settlement_service().get(session_id))


class ParticipantToggleView(DomainAPIView):
    """Handler for POST /api/settlements/{session_id}/participants/{participant_id}/toggle"""

    def post(self, request: Request, session_id: str, participant_id: str) -> Response:
        return session_response(settlement_service().toggle_participant(session_id, participant_id))


class ConfirmParticipantsView(DomainAPIView):
    """Handler for POST /api/settlements/{session_id}/confirm"""

    def post(self, request: Request, session_id: str) -> Response:
        return session_response(settlement_service().confirm_participants(session_id))


class SplitMethodView(DomainAPIView):
    """Handler for PUT /api/settlements/{session_id}/split-method"""

    def put(self, request: Request, session_id: str) -> Response:
        serializer = SplitMethodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = settlement_service().choose_split_method(session_id, serializer.validated_data["method"])
        return session_response(session)


class CustomAmountView(DomainAPIView):
    """Handler for PUT /api/settlements/{session_id}/participants/{participant_id}/amount"""

    def put(self, request: Request, session_id: str, participant_id: str) -> Response:
        serializer = CustomAmountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = settlement_service().set_custom_amount(
            session_id, participant_id, serializer.validated_data["amount"]
        )
        return session_response(session)


class SubmitView(DomainAPIView):
    """Handler for POST /api/settlements/{session_id}/submit"""

    def post(self, request: Request, session_id: str) -> Response:
        issued = settlement_service().submit(session_id)
        return Response(
            {"payment_requests": PaymentRequestSerializer(issued, many=True).data},
            status=status.HTTP_201_CREATED,
        )


class WalletDetailView(DomainAPIView):
    """Handler for GET /api/wallets/{owner}"""

    def get(self, request: Request, owner: str) -> Response:
        return Response(WalletSerializer(wallet_service().get_wallet(owner)).data)


class DepositView(DomainAPIView):
    """Handler for POST /api/wallets/{owner}/deposit"""

    def post(self, request: Request, owner: str) -> Response:
        serializer = AmountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        wallet = wallet_service().deposit(owner, serializer.validated_data["amount"])
        return Response(WalletSerializer(wallet).data)


class WithdrawView(DomainAPIView):
    """Handler for POST /api/wallets/{owner}/withdraw"""

    def post(self, request: Request, owner: str) -> Response:
        serializer = AmountSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        wallet = wallet_service().withdraw(owner, serializer.validated_data["amount"])
        return Response(WalletSerializer(wallet).data)


class TransferView(DomainAPIView):
    """Handler for POST /api/wallets/{owner}/transfer"""

    def post(self, request: Request, owner: str) -> Response:
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        wallet = wallet_service().transfer(owner, data["recipient"], data["amount"], data["note"])
        return Response(WalletSerializer(wallet).data)


class PayRequestView(DomainAPIView):
    """Handler for POST /api/payment-requests/{request_id}/pay"""

    def post(self, request: Request, request_id: str) -> Response:
        return Response(WalletSerializer(wallet_service().pay_request(request_id)).data)
