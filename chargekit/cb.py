"""
Circuit breaker guarding backend calls

Transport failures and 5xx responses count against the breaker; 4xx API
errors are the caller's problem and are excluded.
"""

import logging
from pybreaker import CircuitBreaker, CircuitBreakerListener

from chargekit.exceptions import APIError

logger = logging.getLogger("chargekit.cb")


class LoggingListener(CircuitBreakerListener):
    """Logs breaker state changes and failures"""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "CircuitBreaker %s state change %s -> %s", cb.name, old_state, new_state
        )

    def failure(self, cb, exc):
        logger.warning("CircuitBreaker %s failure: %s", cb.name, exc)


def is_client_error(exc: BaseException) -> bool:
    return isinstance(exc, APIError) and 400 <= exc.status_code < 500


def create_circuit_breaker(
    name: str, fail_max: int = 5, reset_timeout: int = 60
) -> CircuitBreaker:
    """
    Create a pybreaker.CircuitBreaker for one backend.

    Args:
        name: Breaker name used in log lines
        fail_max: Consecutive failures before the circuit opens
        reset_timeout: Seconds before a half-open trial call

    Returns:
        CircuitBreaker: Configured breaker
    """
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        exclude=[is_client_error],
        name=name,
        listeners=[LoggingListener()],
    )
