"""Runs one load test against a target."""
import logging
from typing import List, Optional

from loadtrace.shared.config import Config
from .models import AggregateStats, DurationMetrics, LoadTestConfig
from .client_manager import ClientManager
from .request_executor import RequestExecutor
from .concurrency_manager import ConcurrencyManager
from .latency_analyzer import LatencyAnalyzer
from .progress import ProgressCallback, ProgressCounter


# Configure logging
logger = logging.getLogger(__name__)


class LoadTester:
    """Wires the client, workers and analyzer for one configuration."""

    def __init__(self, config: LoadTestConfig, settings: Optional[Config] = None, progress_callback: Optional[ProgressCallback] = None):
        self.config = config
        self.settings = settings if settings is not None else Config()
        self.progress_callback = progress_callback
        self.client_manager = ClientManager()
        self.request_executor = RequestExecutor(
            config,
            append_url_suffixes=self.settings.append_url_suffixes,
            request_timeout=self.settings.request_timeout,
        )
        self.concurrency_manager = ConcurrencyManager(config, self.request_executor)
        self.latency_analyzer = LatencyAnalyzer(self.settings.tcp_outlier_threshold_ms)
        self.records: List[DurationMetrics] = []

    def run(self) -> AggregateStats:
        """
        Issue all requests and aggregate the results.

        Returns:
            AggregateStats for the run.
        """
        mode = "file mode" if self.config.file_mode else "count mode"
        logger.info(
            f"Starting load test with {self.config.concurrency} concurrent users: "
            f"{self.config.total_requests} requests to {self.config.base_url} ({mode})"
        )
        progress = ProgressCounter(self.config.total_requests, self.progress_callback)

        with self.client_manager.create_client(self.settings) as client:
            self.records, elapsed = self.concurrency_manager.run_workers(client, progress)

        logger.info(f"Completed {len(self.records)} requests in {elapsed:.3f}s")
        return self.latency_analyzer.aggregate(self.records, elapsed, self.config.is_tls)
