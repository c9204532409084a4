"""
chargekit exceptions
"""

from typing import Optional, Dict, Any


class ChargekitError(Exception):
    """Base exception for chargekit"""

    pass


class APIError(ChargekitError):
    """API request error"""

    def __init__(
        self,
        status_code: int,
        message: str,
        body: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
        error_type: Optional[str] = None,
        code: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.body = body or {}
        self.request_id = request_id
        self.error_type = error_type
        self.code = code
        super().__init__(f"APIError {status_code}: {message}")

    def __str__(self) -> str:
        parts = [f"[{self.status_code}] {self.message}"]
        if self.code:
            parts.append(f"(code: {self.code})")
        if self.request_id:
            parts.append(f"(request_id: {self.request_id})")
        return " ".join(parts)


class ConfigurationError(ChargekitError):
    """Client configuration error"""

    pass


class NetworkError(ChargekitError):
    """Network/connectivity error"""

    pass


class TimeoutError(ChargekitError):
    """Request timeout error"""

    pass
