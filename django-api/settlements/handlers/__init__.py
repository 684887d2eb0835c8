from settlements.handlers.views import (
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

__all__ = [
    "ConfirmParticipantsView",
    "CustomAmountView",
    "DepositView",
    "EventListView",
    "ParticipantToggleView",
    "PayRequestView",
    "SettlementDetailView",
    "SettlementStartView",
    "SplitMethodView",
    "SubmitView",
    "TransferView",
    "WalletDetailView",
    "WithdrawView",
]
