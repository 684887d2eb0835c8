"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models


class Event(models.Model):
    """Persistence model for organizer events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    date = models.DateField()
    court_name = models.CharField(max_length=255)
    business_name = models.CharField(max_length=255)
    organizer_email = models.EmailField()
    total_cost = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(fields=["date"], name="settlements_date_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Participant(models.Model):
    """Persistence model for an event's participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="participants")
    name = models.CharField(max_length=255)
    email = models.EmailField()
    has_paid = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "name"]
        indexes = [
            models.Index(fields=["event", "position"], name="settlements_event_position_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.event.title}"


class PaymentRequest(models.Model):
    """Persistence model for payment requests issued by a settlement session."""

    class Status(models.TextChoices):
        PENDING = "pending"
        PAID = "paid"
        CANCELLED = "cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session_id = models.UUIDField()
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="payment_requests")
    participant = models.ForeignKey(
        Participant, on_delete=models.CASCADE, related_name="payment_requests"
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["session_id", "participant"], name="one_request_per_session_participant"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.participant.name} - {self.amount} ({self.status})"


class Wallet(models.Model):
    """Persistence model for a user's wallet."""

    owner = models.EmailField(primary_key=True)
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.owner} - {self.balance}"


class WalletTransaction(models.Model):
    """Persistence model for wallet ledger entries."""

    class Type(models.TextChoices):
        DEPOSIT = "deposit"
        WITHDRAWAL = "withdrawal"
        PAYMENT = "payment"
        REFUND = "refund"
        TRANSFER = "transfer"

    class Status(models.TextChoices):
        COMPLETED = "completed"
        PENDING = "pending"
        FAILED = "failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    wallet = models.ForeignKey(Wallet, on_delete=models.CASCADE, related_name="transactions")
    type = models.CharField(max_length=20, choices=Type.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices)
    created_at = models.DateTimeField()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["wallet", "-created_at"], name="settlements_wallet_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.type} {self.amount} ({self.status})"
