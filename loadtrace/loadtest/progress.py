"""Thread-safe progress counting for completed requests."""
import logging
import threading
from typing import Callable, Optional

from loadtrace.const import DEFAULT_PROGRESS_LOG_STEP


# Configure logging
logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class ProgressCounter:
    """Counts completed requests across workers and notifies a callback."""

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None):
        self.total = total
        self.callback = callback
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def advance(self, amount: int = 1) -> int:
        """Add completed requests and return the new count."""
        with self._lock:
            self._completed += amount
            completed = self._completed
            # Called under the lock so reports arrive in order.
            if self.callback is not None:
                try:
                    self.callback(completed, self.total)
                except Exception as e:
                    logger.error(f"Progress callback failed at {completed}/{self.total}: {e}", exc_info=True)
        return completed


class ProgressLogger:
    """Progress callback that logs every ``step`` percent of completed requests."""

    def __init__(self, step: int = DEFAULT_PROGRESS_LOG_STEP):
        self.step = max(step, 1)
        self._next_percent = self.step

    def __call__(self, completed: int, total: int) -> None:
        percent = completed * 100 // total if total else 100
        if percent >= self._next_percent or completed == total:
            logger.info(f"Progress: {completed}/{total} requests ({percent}%)")
            self._next_percent = (percent // self.step + 1) * self.step
