"""HTTP client utilities for the slot API.

Purpose: Centralize HTTP configuration (connection pooling, default timeout).

Pattern: requests.Session with a pooled adapter and a circuit breaker.
Requests are never retried: a failed call surfaces to the caller as-is.
"""
import requests
from requests.adapters import HTTPAdapter
import logging
from slotbook import config
from slotbook.circuit_breaker import CircuitBreaker

logger = logging.getLogger(__name__)

# Network-level failures mean the API is unreachable
CONNECTION_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)


def create_http_session(timeout: int = config.HTTP_TIMEOUT) -> requests.Session:
    """
    Create HTTP session with connection pooling and a default timeout.

    Args:
        timeout: Request timeout in seconds applied when the caller gives none

    Returns:
        Configured requests.Session
    """
    session = requests.Session()

    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=10,
        pool_maxsize=10,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    original_request = session.request

    def request_with_timeout(method, url, **kwargs):
        kwargs.setdefault('timeout', timeout)
        logger.debug(f"{method} {url}")
        return original_request(method, url, **kwargs)

    session.request = request_with_timeout

    return session


def create_api_circuit_breaker() -> CircuitBreaker:
    """Breaker that only trips on connection failures and timeouts."""
    return CircuitBreaker(failure_threshold=3, timeout=30, tracked=CONNECTION_ERRORS)


# Global session (reuse connections)
api_session = create_http_session()
