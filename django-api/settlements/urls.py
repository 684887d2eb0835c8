from django.urls import path

from settlements.handlers import (
    ConfirmParticipantsView,
    CustomAmountView,
    DepositView,
    EventListView,
    ParticipantToggleView,
    PayRequestView,
    SettlementDetailView,
    SettlementStartView,
    SplitMethodView,
    SubmitView,
    TransferView,
    WalletDetailView,
    WithdrawView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("settlements", SettlementStartView.as_view(), name="settlement-start"),
    path("settlements/<str:session_id>", SettlementDetailView.as_view(), name="settlement-detail"),
    path(
        "settlements/<str:session_id>/participants/<str:participant_id>/toggle",
        ParticipantToggleView.as_view(),
        name="settlement-participant-toggle",
    ),
    path(
        "settlements/<str:session_id>/participants/<str:participant_id>/amount",
        CustomAmountView.as_view(),
        name="settlement-participant-amount",
    ),
    path("settlements/<str:session_id>/confirm", ConfirmParticipantsView.as_view(), name="settlement-confirm"),
    path("settlements/<str:session_id>/split-method", SplitMethodView.as_view(), name="settlement-split-method"),
    path("settlements/<str:session_id>/submit", SubmitView.as_view(), name="settlement-submit"),
    path("wallets/<str:owner>", WalletDetailView.as_view(), name="wallet-detail"),
    path("wallets/<str:owner>/deposit", DepositView.as_view(), name="wallet-deposit"),
    path("wallets/<str:owner>/withdraw", WithdrawView.as_view(), name="wallet-withdraw"),
    path("wallets/<str:owner>/transfer", TransferView.as_view(), name="wallet-transfer"),
    path("payment-requests/<str:request_id>/pay", PayRequestView.as_view(), name="payment-request-pay"),
]
