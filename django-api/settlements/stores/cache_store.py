"""Settlement sessions are transient; they live in the Django cache until they expire."""

from django.conf import settings
from django.core.cache import cache

from settlements.domain import SessionId, SettlementSession
from settlements.stores.interfaces import SessionStore


def session_key(session_id: SessionId) -> str:
    return f"settlements:session:{session_id}"


class CacheSessionStore(SessionStore):
    def __init__(self, timeout: int | None = None) -> None:
        self._timeout = settings.SETTLEMENT_SESSION_TTL if timeout is None else timeout

    def get(self, session_id: SessionId) -> SettlementSession | None:
        return cache.get(session_key(session_id))

    def save(self, session: SettlementSession) -> None:
        cache.set(session_key(session.id), session, self._timeout)
