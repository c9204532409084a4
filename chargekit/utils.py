"""
chargekit utilities
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple, Union

SENSITIVE_KEYS = {"api_key", "token", "secret", "password", "authorization", "number", "cvc", "card"}

REDACTED = "***REDACTED***"


def setup_logging(debug: bool = False) -> None:
    """
    Setup basic logging for the client

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _is_sensitive(key: str) -> bool:
    key = key.lower()
    return any(sensitive in key for sensitive in SENSITIVE_KEYS)


def sanitize_for_logging(
    data: Union[Dict[str, Any], Iterable[Tuple[str, str]]]
) -> Union[Dict[str, Any], List[Tuple[str, str]]]:
    """
    Redact sensitive values before logging

    Accepts either a decoded JSON object or a form body of (key, value)
    pairs and returns the same shape. Card fields such as ``card[number]``
    are redacted along with keys and tokens.

    Args:
        data: JSON object or form body

    Returns:
        Sanitized copy
    """
    if isinstance(data, dict):
        sanitized: Dict[str, Any] = {}
        for key, value in data.items():
            if _is_sensitive(key) and not isinstance(value, dict):
                sanitized[key] = REDACTED
            elif isinstance(value, dict):
                sanitized[key] = sanitize_for_logging(value)
            else:
                sanitized[key] = value
        return sanitized

    return [(key, REDACTED if _is_sensitive(key) else value) for key, value in data]
