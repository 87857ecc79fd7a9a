"""Manages concurrent request execution."""
import logging
import queue
import time
import concurrent.futures
from typing import List, Optional, Tuple

import httpx

from .models import DurationMetrics, LoadTestConfig
from .dispatcher import Dispatcher
from .exceptions import LoadTestExecutionError
from .progress import ProgressCounter
from .request_executor import RequestExecutor


# Configure logging
logger = logging.getLogger(__name__)


class ConcurrencyManager:
    """Runs a fixed pool of workers over a shared work queue."""

    def __init__(self, config: LoadTestConfig, request_executor: RequestExecutor):
        self.config = config
        self.request_executor = request_executor

    def run_workers(self, client: httpx.Client, progress: Optional[ProgressCounter] = None) -> Tuple[List[DurationMetrics], float]:
        """
        Issue every request of the run with ``config.concurrency`` workers.

        Args:
            client: Shared HTTP client.
            progress: Counter advanced once per completed request.

        Returns:
            Tuple of (records in completion order, elapsed wall-clock seconds).

        Raises:
            LoadTestExecutionError: If a worker dies or the number of records differs from the request count.
        """
        total = self.config.total_requests
        workers = self.config.concurrency
        if progress is None:
            progress = ProgressCounter(total)

        # Handoff queue: a token waits until a worker is free to take it.
        work_queue = queue.Queue(maxsize=1)
        results = queue.Queue(maxsize=total)
        futures = []
        dispatcher = Dispatcher(work_queue, workers, is_alive=lambda: not all(future.done() for future in futures))

        start = time.perf_counter()
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="loadtrace-worker") as executor:
            futures.extend(executor.submit(self._worker, client, work_queue, results, progress) for _ in range(workers))
            try:
                dispatcher.dispatch(self.config.tokens())
            except LoadTestExecutionError:
                self._raise_worker_error(futures)
                raise
            # Completion barrier: every worker has drained the queue.
            for future in concurrent.futures.as_completed(futures):
                self._raise_worker_error([future])
        elapsed = time.perf_counter() - start

        records = []
        while not results.empty():
            records.append(results.get_nowait())

        if len(records) != total:
            raise LoadTestExecutionError(f"Expected {total} results, got {len(records)}")
        return records, elapsed

    @staticmethod
    def _raise_worker_error(futures: List[concurrent.futures.Future]) -> None:
        for future in futures:
            if future.done() and future.exception() is not None:
                error = future.exception()
                raise LoadTestExecutionError(f"Worker stopped unexpectedly: {error}") from error

    def _worker(self, client: httpx.Client, work_queue: queue.Queue, results: queue.Queue, progress: ProgressCounter) -> int:
        handled = 0
        while True:
            token = work_queue.get()
            if token is Dispatcher.STOP:
                return handled
            try:
                metrics = self.request_executor.send_request(client, token)
            except Exception as e:
                logger.error(f"Unexpected error while requesting token {token!r}: {e}", exc_info=True)
                metrics = DurationMetrics(token=token, error=str(e) or type(e).__name__)
            progress.advance()
            results.put(metrics)
            handled += 1
