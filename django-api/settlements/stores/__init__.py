from settlements.stores.interfaces import EventStore, PaymentRequestStore, SessionStore, WalletStore

__all__ = [
    "EventStore",
    "PaymentRequestStore",
    "SessionStore",
    "WalletStore",
]
