"""httpx transport over an httpcore connection pool with a pluggable network backend."""
import contextlib
import logging
import ssl
from typing import Iterator, Optional

import httpcore
import httpx


# Configure logging
logger = logging.getLogger(__name__)

# Most specific first: subclasses must be matched before their bases.
_ERROR_MAP = (
    (httpcore.ConnectTimeout, httpx.ConnectTimeout),
    (httpcore.ReadTimeout, httpx.ReadTimeout),
    (httpcore.WriteTimeout, httpx.WriteTimeout),
    (httpcore.PoolTimeout, httpx.PoolTimeout),
    (httpcore.ConnectError, httpx.ConnectError),
    (httpcore.ReadError, httpx.ReadError),
    (httpcore.WriteError, httpx.WriteError),
    (httpcore.RemoteProtocolError, httpx.RemoteProtocolError),
    (httpcore.LocalProtocolError, httpx.LocalProtocolError),
    (httpcore.UnsupportedProtocol, httpx.UnsupportedProtocol),
    (httpcore.TimeoutException, httpx.TimeoutException),
    (httpcore.NetworkError, httpx.NetworkError),
    (httpcore.ProtocolError, httpx.ProtocolError),
    (httpcore.ProxyError, httpx.ProxyError),
)


@contextlib.contextmanager
def _mapped_errors(request: Optional[httpx.Request] = None) -> Iterator[None]:
    """Re-raise httpcore errors as the matching httpx errors."""
    try:
        yield
    except Exception as e:
        for core_error, client_error in _ERROR_MAP:
            if isinstance(e, core_error):
                raise client_error(str(e), request=request) from e
        raise


class _ResponseStream(httpx.SyncByteStream):
    def __init__(self, core_stream, request: httpx.Request):
        self._core_stream = core_stream
        self._request = request

    def __iter__(self) -> Iterator[bytes]:
        with _mapped_errors(self._request):
            for chunk in self._core_stream:
                yield chunk

    def close(self) -> None:
        if hasattr(self._core_stream, "close"):
            self._core_stream.close()


class TracingTransport(httpx.BaseTransport):
    """Connection-pooling transport whose new connections go through ``network_backend``.

    Requests keep their extensions, so the ``trace`` and ``timeout``
    extensions set by the client reach the pool unchanged.
    """

    def __init__(self, ssl_context: ssl.SSLContext, limits: httpx.Limits, network_backend: httpcore.NetworkBackend):
        self.limits = limits
        self.network_backend = network_backend
        self.pool = httpcore.ConnectionPool(
            ssl_context=ssl_context,
            max_connections=limits.max_connections,
            max_keepalive_connections=limits.max_keepalive_connections,
            keepalive_expiry=limits.keepalive_expiry,
            network_backend=network_backend,
        )

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        core_request = httpcore.Request(
            method=request.method,
            url=httpcore.URL(
                scheme=request.url.raw_scheme,
                host=request.url.raw_host,
                port=request.url.port,
                target=request.url.raw_path,
            ),
            headers=request.headers.raw,
            content=request.stream,
            extensions=request.extensions,
        )
        with _mapped_errors(request):
            core_response = self.pool.handle_request(core_request)

        return httpx.Response(
            status_code=core_response.status,
            headers=core_response.headers,
            stream=_ResponseStream(core_response.stream, request),
            extensions=core_response.extensions,
        )

    def close(self) -> None:
        self.pool.close()
        close_backend = getattr(self.network_backend, "close", None)
        if close_backend is not None:
            close_backend()
        logger.debug("Transport closed")
