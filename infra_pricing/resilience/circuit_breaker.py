"""
Circuit breaker for live pricing upstreams.
A failing price API is skipped for a while so estimates fall back to offline tables quickly.
"""
import logging
import threading
import time
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger(__name__)


FAILURE_THRESHOLD = 3  # Consecutive failures before the breaker opens
OPEN_STATE_DURATION = 60.0  # Seconds OPEN before a trial request is let through
HALF_OPEN_MAX_REQUESTS = 1


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerError(Exception):
    """Raised when a call is refused because the breaker is open."""
    pass


class CircuitBreaker:
    """
    Per-upstream breaker.

    CLOSED passes every call, OPEN refuses calls until open_duration has elapsed, then
    HALF_OPEN lets a limited number of trial calls decide whether to close or reopen.
    State changes are guarded by a lock so one breaker can be shared across threads.
    """

    def __init__(
        self,
        service_name: str,
        failure_threshold: int = FAILURE_THRESHOLD,
        open_duration: float = OPEN_STATE_DURATION,
        half_open_max_requests: int = HALF_OPEN_MAX_REQUESTS,
    ):
        self.service_name = service_name
        self.failure_threshold = failure_threshold
        self.open_duration = open_duration
        self.half_open_max_requests = half_open_max_requests

        self._lock = threading.Lock()
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._half_open_requests = 0

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def allow_request(self) -> bool:
        """
        Decide whether the caller may contact the upstream now.

        An OPEN breaker whose open_duration has elapsed moves to HALF_OPEN and lets
        this call through as the first trial. HALF_OPEN admits at most
        half_open_max_requests trials until one of them is recorded.

        Returns:
            True if the call may go ahead, False if it should use the fallback instead
        """
        with self._lock:
            if self._state == CircuitState.OPEN:
                if self._opened_at is not None and time.monotonic() - self._opened_at >= self.open_duration:
                    self._transition(CircuitState.HALF_OPEN, "testing recovery")
                    self._half_open_requests = 1
                    return True
                return False

            if self._state == CircuitState.HALF_OPEN:
                if self._half_open_requests < self.half_open_max_requests:
                    self._half_open_requests += 1
                    return True
                return False

            return True

    def ensure_closed(self) -> None:
        """
        Raise instead of returning False when the upstream must be skipped.

        Raises:
            CircuitBreakerError: If the breaker refuses the call
        """
        if not self.allow_request():
            raise CircuitBreakerError(f"Circuit breaker open for {self.service_name}")

    def record_success(self) -> None:
        """
        Report a successful upstream call.

        Resets the consecutive failure count and closes a HALF_OPEN breaker.
        """
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._transition(CircuitState.CLOSED, "service recovered")
                self._opened_at = None
            self._failure_count = 0
            self._half_open_requests = 0

    def record_failure(self) -> None:
        """
        Report a failed upstream call.

        A failed trial reopens a HALF_OPEN breaker at once; a CLOSED breaker opens
        after failure_threshold consecutive failures.
        """
        with self._lock:
            self._failure_count += 1
            if self._state == CircuitState.HALF_OPEN:
                self._transition(CircuitState.OPEN, "service still failing")
                self._opened_at = time.monotonic()
                self._half_open_requests = 0
            elif self._state == CircuitState.CLOSED and self._failure_count >= self.failure_threshold:
                self._transition(CircuitState.OPEN, f"{self._failure_count} consecutive failures")
                self._opened_at = time.monotonic()

    def current_state(self) -> CircuitState:
        """
        Returns:
            The state as last recorded. An OPEN breaker past its open_duration
            still reads OPEN until allow_request moves it to HALF_OPEN.
        """
        with self._lock:
            return self._state

    def reset(self) -> None:
        """Force the breaker CLOSED and forget past failures."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._opened_at = None
            self._half_open_requests = 0

    def _transition(self, new_state: CircuitState, reason: str) -> None:
        logger.warning(
            "Circuit breaker for %s: %s -> %s (%s)",
            self.service_name,
            self._state.name,
            new_state.name,
            reason,
        )
        self._state = new_state


_circuit_breakers: Dict[str, CircuitBreaker] = {}
_breakers_lock = threading.Lock()


def get_circuit_breaker(service_name: str) -> CircuitBreaker:
    """
    Get or create the shared breaker for an upstream.

    Args:
        service_name: Upstream identifier, e.g. "aws_pricing"

    Returns:
        The same CircuitBreaker instance for every caller using this name
    """
    with _breakers_lock:
        breaker = _circuit_breakers.get(service_name)
        if breaker is None:
            breaker = CircuitBreaker(service_name)
            _circuit_breakers[service_name] = breaker
        return breaker


def reset_circuit_breakers() -> None:
    """Forget every breaker (used by tests)."""
    with _breakers_lock:
        _circuit_breakers.clear()
