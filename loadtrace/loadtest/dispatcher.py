"""Feeds work tokens to the worker pool."""
import logging
import queue
from typing import Callable, Iterable, Optional

from .exceptions import LoadTestExecutionError
from .models import WorkToken


# Configure logging
logger = logging.getLogger(__name__)


class Dispatcher:
    """Pushes one token per request into the work queue, then closes it.

    The queue is closed by putting one STOP sentinel per worker. ``put``
    blocks while the queue is full, so dispatch runs at the pace of the pool.
    While blocked, the dispatcher polls ``is_alive`` and gives up once no
    worker is left to drain the queue.
    """

    STOP = None
    POLL_INTERVAL = 0.1

    def __init__(self, work_queue: queue.Queue, workers: int, is_alive: Optional[Callable[[], bool]] = None):
        self.work_queue = work_queue
        self.workers = workers
        self.is_alive = is_alive

    def dispatch(self, tokens: Iterable[WorkToken]) -> int:
        """Dispatch all tokens and close the queue; returns the number dispatched."""
        dispatched = 0
        for token in tokens:
            self._put(token)
            dispatched += 1
        self.close()
        logger.debug(f"Dispatched {dispatched} tokens to {self.workers} workers")
        return dispatched

    def close(self) -> None:
        for _ in range(self.workers):
            self._put(self.STOP)

    def _put(self, item: Optional[WorkToken]) -> None:
        if self.is_alive is None:
            self.work_queue.put(item)
            return
        while True:
            try:
                self.work_queue.put(item, timeout=self.POLL_INTERVAL)
                return
            except queue.Full:
                if not self.is_alive():
                    raise LoadTestExecutionError("All workers stopped before the work queue was drained")
