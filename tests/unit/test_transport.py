"""Unit tests for the pooled tracing transport."""

import socket
import ssl
from unittest.mock import MagicMock

import httpcore
import httpx
import pytest

from loadtrace.loadtest import RequestTrace, ResolvingBackend, TracingTransport
from loadtrace.loadtest.transport import _mapped_errors
from ..test_const import HTTP_SUCCESS, TEST_HTTP_URL


RESPONSE_BYTES = [
    b"HTTP/1.1 200 OK\r\n",
    b"Content-Type: text/plain\r\n",
    b"Content-Length: 13\r\n",
    b"\r\n",
    b"Hello, world!",
]


def _transport(backend, limits=None):
    return TracingTransport(
        ssl_context=ssl.create_default_context(),
        limits=limits or httpx.Limits(max_connections=4, max_keepalive_connections=2),
        network_backend=backend,
    )


class TestTracingTransport:
    """Test request handling through the httpcore pool."""

    def test_request_through_backend(self):
        with httpx.Client(transport=_transport(httpcore.MockBackend(RESPONSE_BYTES))) as client:
            response = client.get(TEST_HTTP_URL + "/hello")

        assert response.status_code == HTTP_SUCCESS
        assert response.text == "Hello, world!"
        assert response.headers["content-type"] == "text/plain"

    def test_trace_extension_reaches_pool(self):
        trace = RequestTrace()
        with httpx.Client(transport=_transport(httpcore.MockBackend(RESPONSE_BYTES))) as client:
            with client.stream("GET", TEST_HTTP_URL, extensions={"trace": trace}) as response:
                response.read()

        assert trace.connect_start is not None
        assert trace.connect_done is not None
        assert trace.connection_obtained is not None
        assert trace.first_byte is not None
        assert trace.reused_connection is False

    def test_limits_are_kept(self):
        limits = httpx.Limits(max_connections=7, max_keepalive_connections=3)
        transport = _transport(MagicMock(), limits)

        assert transport.limits is limits
        assert transport.pool is not None

    def test_connection_refused_is_connect_error(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]

        with httpx.Client(transport=_transport(ResolvingBackend()), timeout=2.0) as client:
            with pytest.raises(httpx.ConnectError):
                client.get(f"http://127.0.0.1:{port}/")

    def test_close_closes_backend(self):
        backend = MagicMock()
        _transport(backend).close()
        backend.close.assert_called_once()


class TestErrorMapping:
    """Test httpcore errors surface as httpx errors."""

    @pytest.mark.parametrize("core_error, client_error", [
        (httpcore.ConnectTimeout, httpx.ConnectTimeout),
        (httpcore.ReadTimeout, httpx.ReadTimeout),
        (httpcore.PoolTimeout, httpx.PoolTimeout),
        (httpcore.ConnectError, httpx.ConnectError),
        (httpcore.ReadError, httpx.ReadError),
        (httpcore.RemoteProtocolError, httpx.RemoteProtocolError),
        (httpcore.UnsupportedProtocol, httpx.UnsupportedProtocol),
    ])
    def test_mapped(self, core_error, client_error):
        with pytest.raises(client_error, match="boom") as excinfo:
            with _mapped_errors():
                raise core_error("boom")
        assert isinstance(excinfo.value.__cause__, core_error)

    def test_other_errors_pass_through(self):
        with pytest.raises(ValueError):
            with _mapped_errors():
                raise ValueError("not a transport error")
