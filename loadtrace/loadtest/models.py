"""Data models for the load testing system."""
from dataclasses import dataclass
from typing import List, Optional

import httpx

from loadtrace.const import HTTP_SCHEME, HTTPS_SCHEME, NO_RESPONSE_STATUS
from .constants import LoadTestConstants
from .exceptions import ConfigurationError

WorkToken = str


@dataclass
class LoadTestConfig:
    """Configuration for one load test run.

    When ``url_suffixes`` is given the run is in file mode and the request
    count is the number of suffixes.
    """
    base_url: str
    concurrency: int = 1
    requests: int = 1
    url_suffixes: Optional[List[str]] = None

    def __post_init__(self):
        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid URL {self.base_url!r}: {e}") from e
        if url.scheme not in (HTTP_SCHEME, HTTPS_SCHEME) or not url.host:
            raise ConfigurationError(f"Invalid URL {self.base_url!r}: expected an absolute http(s) URL")

        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ConfigurationError(f"Concurrency must be a positive integer, got {self.concurrency!r}")

        if self.url_suffixes is not None:
            if not self.url_suffixes:
                raise ConfigurationError("URL suffix list is empty")
            self.url_suffixes = list(self.url_suffixes)
            self.requests = len(self.url_suffixes)
        elif isinstance(self.requests, bool) or not isinstance(self.requests, int) or self.requests < 1:
            raise ConfigurationError(f"Request count must be a positive integer, got {self.requests!r}")

    @property
    def file_mode(self) -> bool:
        return self.url_suffixes is not None

    @property
    def is_tls(self) -> bool:
        return httpx.URL(self.base_url).scheme == HTTPS_SCHEME

    @property
    def total_requests(self) -> int:
        return self.requests

    def tokens(self) -> List[WorkToken]:
        """Work tokens for this run, one per request."""
        if self.url_suffixes is not None:
            return list(self.url_suffixes)
        return [LoadTestConstants.PLACEHOLDER_TOKEN] * self.requests


@dataclass(frozen=True)
class DurationMetrics:
    """Phase durations of one request, in milliseconds."""
    dns_lookup: float = 0.0
    tcp_connection: float = 0.0
    tls_handshake: float = 0.0
    server_processing: float = 0.0
    content_transfer: float = 0.0
    status_code: int = NO_RESPONSE_STATUS
    token: WorkToken = LoadTestConstants.PLACEHOLDER_TOKEN
    reused_connection: bool = False
    error: Optional[str] = None

    @property
    def responded(self) -> bool:
        return self.status_code != NO_RESPONSE_STATUS

    @property
    def succeeded(self) -> bool:
        return LoadTestConstants.SUCCESS_STATUS_MIN <= self.status_code <= LoadTestConstants.SUCCESS_STATUS_MAX


@dataclass(frozen=True)
class PhaseStats:
    """Mean, median and 95th percentile of one phase; None when there is no data."""
    mean: Optional[float] = None
    median: Optional[float] = None
    p95: Optional[float] = None
    samples: int = 0


@dataclass(frozen=True)
class AggregateStats:
    """Summary of a completed run."""
    dns_lookup: PhaseStats
    tcp_connection: PhaseStats
    tls_handshake: Optional[PhaseStats]
    server_processing: PhaseStats
    content_transfer: PhaseStats
    total_requests: int
    failed_requests: int
    requests_per_second: float
    elapsed_seconds: float
    is_tls: bool = False
