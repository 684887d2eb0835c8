"""Payment request dispatch.

The dispatcher is the only place a submitted settlement leaves the process.
It never retries; a failed dispatch is reported to the caller, and because
requests are keyed by (session, participant) a resubmission does not
duplicate the ones that did go out.
"""

import logging
from abc import ABC, abstractmethod

from settlements.domain import Event, PaymentRequest, PaymentRequestLine, SessionId
from settlements.stores.interfaces import PaymentRequestStore

logger = logging.getLogger(__name__)


class PaymentRequestDispatcher(ABC):
    @abstractmethod
    def dispatch(
        self, session_id: SessionId, event: Event, lines: tuple[PaymentRequestLine, ...]
    ) -> list[PaymentRequest]:
        """Send a request to every line's participant; raise if any could not be sent."""
        ...


class LedgerDispatcher(PaymentRequestDispatcher):
    """Records a pending request per participant and logs the notification."""

    def __init__(self, requests: PaymentRequestStore) -> None:
        self._requests = requests

    def dispatch(
        self, session_id: SessionId, event: Event, lines: tuple[PaymentRequestLine, ...]
    ) -> list[PaymentRequest]:
        issued = self._requests.create_requests(session_id, event.id, lines)
        for request in issued:
            logger.info(
                "Payment request %s: %s owes %s for %r",
                request.id,
                request.participant_id,
                request.amount,
                event.title,
            )
        return issued
