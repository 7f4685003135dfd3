import itertools
import logging
import threading

logger = logging.getLogger(__name__)


class LatestResultGate:
    """
    Keeps only the newest recompute result. Each recompute takes a ticket
    before it starts; a result whose ticket is older than the last accepted
    one is dropped. Nothing is cancelled, stale work simply gets ignored.
    """

    def __init__(self):
        self._tickets = itertools.count(1)
        self._lock = threading.Lock()
        self._accepted = 0
        self.result = None

    def next_ticket(self) -> int:
        with self._lock:
            return next(self._tickets)

    @property
    def accepted_ticket(self) -> int:
        return self._accepted

    def offer(self, ticket: int, result) -> bool:
        with self._lock:
            if ticket <= self._accepted:
                logger.warning("Discarding superseded result (ticket %d, latest %d)", ticket, self._accepted)
                return False
            self._accepted = ticket
            self.result = result
            return True
