from django.contrib import admin

from settlements.models import Event, Participant, PaymentRequest, Wallet, WalletTransaction


class ParticipantInline(admin.TabularInline):
    model = Participant
    extra = 1


class WalletTransactionInline(admin.TabularInline):
    model = WalletTransaction
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "date", "court_name", "business_name", "total_cost"]
    search_fields = ["title", "court_name", "business_name"]
    inlines = [ParticipantInline]


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ["name", "email", "event", "has_paid"]
    list_filter = ["event", "has_paid"]


@admin.register(PaymentRequest)
class PaymentRequestAdmin(admin.ModelAdmin):
    list_display = ["participant", "event", "amount", "status", "created_at"]
    list_filter = ["status", "event"]


@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    list_display = ["owner", "balance", "updated_at"]
    search_fields = ["owner"]
    inlines = [WalletTransactionInline]
