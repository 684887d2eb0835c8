"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from settlements.domain import SplitMethod


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    title = serializers.CharField()
    date = serializers.DateField()
    court_name = serializers.CharField()
    business_name = serializers.CharField()
    total_cost = serializers.DecimalField(source="total_cost.amount", max_digits=10, decimal_places=2)


class ParticipantSerializer(serializers.Serializer):
    """Serializer for Participant domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.EmailField()
    has_paid = serializers.BooleanField()
    selected = serializers.BooleanField()
    amount_due = serializers.DecimalField(source="amount_due.amount", max_digits=10, decimal_places=2)


def _error(error):
    if error is None:
        return None
    return {"code": error.code.value, "message": error.message}


class SettlementSessionSerializer(serializers.Serializer):
    """Serializer for a settlement session and its running totals."""

    id = serializers.CharField()
    state = serializers.CharField(source="state.value")
    split_method = serializers.CharField(source="split_method.value")
    event = EventSerializer(allow_null=True)
    participants = serializers.SerializerMethodField()
    # Sums of several participants can outgrow a single amount column.
    requested = serializers.DecimalField(source="requested.amount", max_digits=None, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=None, decimal_places=2)
    notice = serializers.SerializerMethodField()
    blocking_error = serializers.SerializerMethodField()

    def get_participants(self, session):
        return ParticipantSerializer(list(session.participants.values()), many=True).data

    def get_notice(self, session):
        return _error(session.notice)

    def get_blocking_error(self, session):
        return _error(session.readiness())


class PaymentRequestSerializer(serializers.Serializer):
    id = serializers.CharField()
    session_id = serializers.CharField()
    event_id = serializers.CharField()
    participant_id = serializers.CharField()
    amount = serializers.DecimalField(source="amount.amount", max_digits=10, decimal_places=2)
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class TransactionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    type = serializers.CharField(source="type.value")
    amount = serializers.DecimalField(source="amount.amount", max_digits=12, decimal_places=2)
    description = serializers.CharField()
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()


class WalletSerializer(serializers.Serializer):
    owner = serializers.CharField()
    balance = serializers.DecimalField(source="balance.amount", max_digits=12, decimal_places=2)
    transactions = TransactionSerializer(many=True)


class StartSessionSerializer(serializers.Serializer):
    event_id = serializers.CharField()


class SplitMethodSerializer(serializers.Serializer):
    method = serializers.ChoiceField(choices=[m.value for m in SplitMethod])

    def validate_method(self, value: str) -> SplitMethod:
        return SplitMethod(value)


class CustomAmountSerializer(serializers.Serializer):
    # Kept as free text: unparseable input is treated as 0 by the calculator.
    amount = serializers.CharField(allow_blank=True)


class AmountSerializer(serializers.Serializer):
    amount = serializers.CharField()


class TransferSerializer(serializers.Serializer):
    recipient = serializers.CharField(allow_blank=True)
    amount = serializers.CharField()
    note = serializers.CharField(allow_blank=True, required=False, default="")
