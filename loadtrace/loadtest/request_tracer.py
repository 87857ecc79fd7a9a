"""Per-request timing capture from httpx/httpcore trace events."""
import concurrent.futures
import ipaddress
import logging
import socket
import time
from contextvars import ContextVar
from typing import Callable, Optional

import httpcore

from loadtrace.const import NO_RESPONSE_STATUS
from .constants import LoadTestConstants
from .models import DurationMetrics, WorkToken


# Configure logging
logger = logging.getLogger(__name__)

# Trace of the request currently executing on this thread, read by ResolvingBackend.
current_trace: ContextVar[Optional["RequestTrace"]] = ContextVar("current_trace", default=None)


def _elapsed_ms(start: Optional[float], end: Optional[float]) -> float:
    if start is None or end is None:
        return 0.0
    return max(end - start, 0.0) * LoadTestConstants.MS_PER_SECOND


def _first_set(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


class RequestTrace:
    """Lifecycle timestamps of a single request.

    An instance is handed to httpx as the ``trace`` request extension and
    receives the httpcore connection events (``connection.connect_tcp.*``,
    ``connection.start_tls.*``, ``http11.*`` / ``http2.*``). DNS timestamps
    are recorded by ResolvingBackend through ``current_trace``.

    Connections taken from the pool emit no connect events; such requests
    report zero DNS, TCP and TLS durations and are flagged as reused.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self.started = clock()
        self.dns_start: Optional[float] = None
        self.dns_done: Optional[float] = None
        self.connect_start: Optional[float] = None
        self.connect_done: Optional[float] = None
        self.tls_start: Optional[float] = None
        self.tls_done: Optional[float] = None
        self.connection_obtained: Optional[float] = None
        self.first_byte: Optional[float] = None
        self.body_done: Optional[float] = None

    def __call__(self, event_name: str, info: dict) -> None:
        if event_name == "connection.connect_tcp.started":
            self.connect_start = self._clock()
        elif event_name == "connection.connect_tcp.complete":
            self.connect_done = self._clock()
        elif event_name == "connection.start_tls.started":
            self.tls_start = self._clock()
        elif event_name == "connection.start_tls.complete":
            self.tls_done = self._clock()
        elif event_name.endswith(".send_request_headers.started"):
            if self.connection_obtained is None:
                self.connection_obtained = self._clock()
        elif event_name.endswith(".receive_response_headers.complete"):
            self.first_byte = self._clock()

    def now(self) -> float:
        return self._clock()

    def mark_dns_start(self) -> None:
        self.dns_start = self._clock()

    def mark_dns_done(self) -> None:
        self.dns_done = self._clock()

    def mark_body_done(self) -> None:
        self.body_done = self._clock()

    @property
    def reused_connection(self) -> bool:
        return self.connect_start is None

    def to_metrics(self, status_code: int, token: WorkToken, is_tls: bool, error: Optional[str] = None) -> DurationMetrics:
        """
        Convert the recorded timestamps into phase durations.

        Args:
            status_code: Response status, or 0 when no response was received.
            token: Work token the request was issued for.
            is_tls: Whether the target is HTTPS.
            error: Description of the transport error, if any.

        Returns:
            DurationMetrics with all durations in milliseconds.
        """
        if error is not None or status_code == NO_RESPONSE_STATUS:
            return DurationMetrics(
                status_code=status_code,
                token=token,
                reused_connection=self.reused_connection,
                error=error,
            )

        # Literal IP hosts skip DNS: the lookup ends where the connect starts.
        dns_done = _first_set(self.dns_done, self.connect_start)
        obtained = _first_set(self.connection_obtained, self.tls_done, self.connect_done, self.started)
        first_byte = _first_set(self.first_byte, obtained)
        body_done = _first_set(self.body_done, first_byte)

        reused = self.reused_connection
        tls_handshake = 0.0
        if is_tls and not reused:
            tls_handshake = _elapsed_ms(self.tls_start, self.tls_done)

        return DurationMetrics(
            dns_lookup=_elapsed_ms(self.dns_start, dns_done),
            tcp_connection=0.0 if reused else _elapsed_ms(dns_done, obtained),
            tls_handshake=tls_handshake,
            server_processing=_elapsed_ms(obtained, first_byte),
            content_transfer=_elapsed_ms(first_byte, body_done),
            status_code=status_code,
            token=token,
            reused_connection=reused,
        )


class ResolvingBackend(httpcore.SyncBackend):
    """Network backend that resolves host names itself so the lookup can be timed.

    Lookups run on a small thread pool so the connect timeout also bounds
    name resolution; getaddrinfo itself cannot be interrupted.
    """

    def __init__(self, max_workers: Optional[int] = None):
        self._resolver = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="loadtrace-dns"
        )

    def resolve(self, host: str, port: int, timeout: Optional[float] = None) -> list:
        """Resolve host to socket addresses within timeout seconds."""
        future = self._resolver.submit(socket.getaddrinfo, host, port, type=socket.SOCK_STREAM)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError as e:
            future.cancel()
            raise httpcore.ConnectTimeout(f"DNS lookup for {host} timed out after {timeout}s") from e
        except (socket.gaierror, UnicodeError) as e:
            raise httpcore.ConnectError(f"DNS lookup for {host} failed: {e}") from e

    def close(self) -> None:
        self._resolver.shutdown(wait=False)

    def connect_tcp(self, host, port, timeout=None, local_address=None, socket_options=None):
        if _is_ip_literal(host):
            return super().connect_tcp(
                host, port, timeout=timeout, local_address=local_address, socket_options=socket_options
            )

        trace = current_trace.get()
        if trace is not None:
            trace.mark_dns_start()
        addresses = self.resolve(host, port, timeout)
        if trace is not None:
            trace.mark_dns_done()

        last_error = None
        for address in dict.fromkeys(info[4][0] for info in addresses):
            try:
                return super().connect_tcp(
                    address, port, timeout=timeout, local_address=local_address, socket_options=socket_options
                )
            except httpcore.ConnectError as e:
                logger.debug(f"Connect to {host} via {address} failed: {e}")
                last_error = e
        raise last_error
