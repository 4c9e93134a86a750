"""Circuit breaker around the remote slot API.

Purpose: stop calling an unreachable API and let the client switch to local mode.

States:
- CLOSED: Normal operation, requests pass through
- OPEN: API unreachable, requests fail immediately
- HALF_OPEN: Timeout elapsed, one request is let through to probe the API

Only `tracked` exceptions count as failures. A 409 from a reachable API is an
answer, not an outage, so it passes through without touching the state.
"""
import time
import logging
from typing import Callable, Any, Optional, Tuple, Type
from enum import Enum

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpen(Exception):
    """Raised when circuit breaker is open (fail fast)."""
    pass


class CircuitBreaker:
    """Circuit breaker for calls to the slot API."""

    def __init__(self, failure_threshold: int = 3, timeout: int = 30,
                 tracked: Tuple[Type[BaseException], ...] = (Exception,)):
        """
        Args:
            failure_threshold: Consecutive tracked failures before opening
            timeout: Seconds to stay open before a half-open probe
            tracked: Exception types that count as failures
        """
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.tracked = tracked
        self.failure_count = 0
        self.last_failure_time: Optional[float] = None
        self._state = CircuitState.CLOSED

    @property
    def state(self) -> str:
        return self._state.value

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute func under breaker protection.

        Raises:
            CircuitBreakerOpen: If circuit is open
            Exception: Whatever func raises
        """
        if self._state == CircuitState.OPEN:
            if self._should_attempt_reset():
                self._state = CircuitState.HALF_OPEN
                logger.info("Circuit breaker transitioning to HALF_OPEN")
            else:
                raise CircuitBreakerOpen(
                    f"Slot API unavailable. "
                    f"Retry after {self._time_until_retry():.1f}s"
                )

        try:
            result = func(*args, **kwargs)
        except self.tracked:
            self._on_failure()
            raise

        self._on_success()
        return result

    def reset(self):
        self.failure_count = 0
        self.last_failure_time = None
        self._state = CircuitState.CLOSED

    def _should_attempt_reset(self) -> bool:
        if self.last_failure_time is None:
            return True
        return time.time() - self.last_failure_time >= self.timeout

    def _time_until_retry(self) -> float:
        if self.last_failure_time is None:
            return 0
        return max(0, self.timeout - (time.time() - self.last_failure_time))

    def _on_success(self):
        self.failure_count = 0
        if self._state == CircuitState.HALF_OPEN:
            self._state = CircuitState.CLOSED
            logger.info("Circuit breaker closed after successful half-open attempt")

    def _on_failure(self):
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self._state == CircuitState.HALF_OPEN:
            self._state = CircuitState.OPEN
            logger.warning("Circuit breaker opened after failed half-open attempt")
        elif self.failure_count >= self.failure_threshold:
            self._state = CircuitState.OPEN
            logger.error(
                f"Circuit breaker opened after {self.failure_count} failures. "
                f"Timeout: {self.timeout}s"
            )
