"""Manages the shared HTTP client."""
import logging
import ssl
from typing import Optional, Union

import certifi
import httpx

from loadtrace.shared.config import Config
from .exceptions import ConfigurationError
from .request_tracer import ResolvingBackend
from .transport import TracingTransport


# Configure logging
logger = logging.getLogger(__name__)


class ClientManager:
    """Creates the HTTP client shared by all workers of a run."""

    @staticmethod
    def create_ssl_context(verify: Union[bool, str] = True) -> ssl.SSLContext:
        """
        Build the TLS context for HTTPS targets.

        Args:
            verify: True for the certifi CA bundle, False to skip certificate
                checks, or the path of a CA bundle to trust.

        Raises:
            ConfigurationError: If the CA bundle cannot be loaded.
        """
        if verify is False:
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            logger.warning("TLS certificate verification is disabled")
            return context

        cafile = certifi.where() if verify is True else str(verify)
        try:
            return ssl.create_default_context(cafile=cafile)
        except (OSError, ssl.SSLError) as e:
            raise ConfigurationError(f"Cannot load CA bundle {cafile}: {e}") from e

    @staticmethod
    def create_transport(settings: Optional[Config] = None) -> TracingTransport:
        """Create the pooled transport with the run's pool limits and the DNS-timing backend."""
        if settings is None:
            settings = Config()
        limits = httpx.Limits(
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        )
        return TracingTransport(
            ssl_context=ClientManager.create_ssl_context(settings.tls_verify),
            limits=limits,
            network_backend=ResolvingBackend(),
        )

    @staticmethod
    def create_client(settings: Optional[Config] = None) -> httpx.Client:
        """Create an httpx client with the run's timeout and pool limits."""
        if settings is None:
            settings = Config()
        transport = ClientManager.create_transport(settings)
        logger.debug(
            f"HTTP client created: timeout={settings.request_timeout}s, "
            f"max_connections={settings.max_connections}, keepalive={settings.max_keepalive_connections}"
        )
        return httpx.Client(transport=transport, timeout=httpx.Timeout(settings.request_timeout))
