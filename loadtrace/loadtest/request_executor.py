"""Handles individual request execution and timing."""
import logging

import httpx

from loadtrace.const import DEFAULT_REQUEST_TIMEOUT, NO_RESPONSE_STATUS
from .models import DurationMetrics, LoadTestConfig, WorkToken
from .request_tracer import RequestTrace, current_trace


# Configure logging
logger = logging.getLogger(__name__)


class RequestExecutor:
    """Handles individual request execution and timing."""

    def __init__(self, config: LoadTestConfig, append_url_suffixes: bool = True, request_timeout: float = DEFAULT_REQUEST_TIMEOUT):
        self.config = config
        self.append_url_suffixes = append_url_suffixes
        self.request_timeout = request_timeout

    def build_url(self, token: WorkToken) -> str:
        """URL requested for a token; file-mode suffixes are appended to the base URL."""
        if not self.config.file_mode or not self.append_url_suffixes:
            return self.config.base_url
        return self.config.base_url + token

    def send_request(self, client: httpx.Client, token: WorkToken) -> DurationMetrics:
        """
        Send a single traced GET request and measure its phases.

        The whole request, from connect to the last body byte, must finish
        within ``request_timeout`` seconds. Each network wait is given only
        the time left, and the body is abandoned once the deadline passes.

        Args:
            client: Shared HTTP client.
            token: Work token the request is issued for.

        Returns:
            DurationMetrics for the request. Transport errors and exceeded
            deadlines yield a record with status code 0 instead of raising.
        """
        url = self.build_url(token)
        is_tls = self.config.is_tls
        trace = RequestTrace()
        deadline = trace.started + self.request_timeout
        context_token = current_trace.set(trace)
        try:
            timeout = httpx.Timeout(self._remaining(trace, deadline))
            with client.stream("GET", url, timeout=timeout, extensions={"trace": trace}) as response:
                self._check_deadline(trace, deadline, response.request)
                try:
                    for _ in response.iter_raw():
                        self._check_deadline(trace, deadline, response.request)
                except httpx.TimeoutException:
                    raise
                except httpx.HTTPError as e:
                    logger.warning(f"Failed to read HTTP response body from {url}: {e}")
                trace.mark_body_done()
                status_code = response.status_code
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            return trace.to_metrics(NO_RESPONSE_STATUS, token, is_tls, error=str(e) or type(e).__name__)
        finally:
            current_trace.reset(context_token)

        return trace.to_metrics(status_code, token, is_tls)

    @staticmethod
    def _remaining(trace: RequestTrace, deadline: float) -> float:
        return max(deadline - trace.now(), 0.0)

    def _check_deadline(self, trace: RequestTrace, deadline: float, request: httpx.Request) -> None:
        if trace.now() >= deadline:
            raise httpx.TimeoutException(f"Request exceeded the {self.request_timeout}s deadline", request=request)
