"""Analyzes and computes latency statistics."""
import logging
from typing import List, Optional, Sequence

import numpy as np

from loadtrace.const import DEFAULT_TCP_OUTLIER_THRESHOLD_MS
from .constants import LoadTestConstants
from .models import AggregateStats, DurationMetrics, PhaseStats


# Configure logging
logger = logging.getLogger(__name__)


class LatencyAnalyzer:
    """Analyzes and computes latency statistics."""

    def __init__(self, tcp_outlier_threshold_ms: Optional[float] = DEFAULT_TCP_OUTLIER_THRESHOLD_MS):
        self.tcp_outlier_threshold_ms = tcp_outlier_threshold_ms

    @staticmethod
    def compute_phase_stats(samples: Sequence[float]) -> PhaseStats:
        """
        Compute mean, median and 95th percentile.

        The percentile is the nearest-rank value: the element at position
        ceil(0.95 * n) of the sorted sample.

        Args:
            samples: Durations in milliseconds, in any order.

        Returns:
            PhaseStats; all values are None for an empty sample.
        """
        if len(samples) == 0:
            return PhaseStats()

        values = np.asarray(samples, dtype=float)
        return PhaseStats(
            mean=float(np.mean(values)),
            median=float(np.median(values)),
            p95=float(np.percentile(values, LoadTestConstants.PERCENTILE, method="inverted_cdf")),
            samples=len(values),
        )

    @staticmethod
    def count_failures(records: Sequence[DurationMetrics]) -> int:
        return sum(1 for record in records if not record.succeeded)

    @staticmethod
    def requests_per_second(total_requests: int, elapsed_seconds: float) -> float:
        if elapsed_seconds <= 0:
            return 0.0
        return total_requests / elapsed_seconds

    def _below_tcp_threshold(self, duration: float) -> bool:
        return self.tcp_outlier_threshold_ms is None or duration < self.tcp_outlier_threshold_ms

    def aggregate(self, records: List[DurationMetrics], elapsed_seconds: float, is_tls: bool) -> AggregateStats:
        """
        Aggregate the records of a run.

        Records without a response count as failures and are left out of
        every latency sample. Reused connections are left out of the TCP
        and TLS samples.

        Args:
            records: One record per issued request.
            elapsed_seconds: Wall-clock duration of the run.
            is_tls: Whether the target is HTTPS; TLS stats are None otherwise.

        Returns:
            AggregateStats for the run.
        """
        responded = [record for record in records if record.responded]
        new_connections = [record for record in responded if not record.reused_connection]

        dns_samples = [r.dns_lookup for r in responded if r.dns_lookup != 0]
        tcp_samples = [r.tcp_connection for r in new_connections if self._below_tcp_threshold(r.tcp_connection)]
        server_samples = [r.server_processing for r in responded]
        transfer_samples = [r.content_transfer for r in responded]

        tls_stats = None
        if is_tls:
            tls_stats = self.compute_phase_stats([r.tls_handshake for r in new_connections])

        failed = self.count_failures(records)
        if failed:
            logger.warning(f"{failed} of {len(records)} requests failed")

        return AggregateStats(
            dns_lookup=self.compute_phase_stats(dns_samples),
            tcp_connection=self.compute_phase_stats(tcp_samples),
            tls_handshake=tls_stats,
            server_processing=self.compute_phase_stats(server_samples),
            content_transfer=self.compute_phase_stats(transfer_samples),
            total_requests=len(records),
            failed_requests=failed,
            requests_per_second=self.requests_per_second(len(records), elapsed_seconds),
            elapsed_seconds=elapsed_seconds,
            is_tls=is_tls,
        )
