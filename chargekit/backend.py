"""
HTTP backend

Sends form-encoded requests to the API and decodes JSON responses. Resource
clients never talk to requests directly; they go through Backend.call.
"""

import time
import logging
from typing import Optional, Dict, Any, Tuple
import requests
from requests.exceptions import RequestException, Timeout

from chargekit.models import ClientConfig
from chargekit.params import QueryBody
from chargekit.cb import create_circuit_breaker
from chargekit.metrics import metrics_request
from chargekit.utils import setup_logging, sanitize_for_logging
from chargekit.exceptions import (
    APIError,
    ConfigurationError,
    NetworkError,
    TimeoutError as ChargekitTimeoutError,
)
from chargekit.__version__ import __version__

logger = logging.getLogger("chargekit.backend")

REQUEST_ID_HEADER = "Request-Id"


class Backend:
    """
    Form-encoded HTTP transport

    Features:
    - Form-encoded bodies (query string for GET, request body otherwise)
    - Bearer authentication with the configured API key
    - Circuit breaker around every call
    - Prometheus request metrics
    - Sanitised debug logging

    Example:
        >>> backend = Backend(ClientConfig(api_key="sk_test_123"))
        >>> body = backend.call("GET", "/charges/ch_123", endpoint="charges.get")
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        """
        Initialize backend

        Args:
            config: Client configuration
            session: Optional requests session to reuse

        Raises:
            ConfigurationError: If configuration is invalid
        """
        self.config = config

        if config.debug:
            setup_logging(debug=True)

        self._validate_config()

        self.session = session or requests.Session()
        self.session.verify = config.verify_ssl

        self.base_url = config.base_url.rstrip("/")
        self.headers = {
            "Accept": "application/json",
            "User-Agent": f"chargekit-python/{__version__}",
        }

        self.cb = create_circuit_breaker(
            name=f"chargekit:{self.base_url}",
            fail_max=config.cb_fail_max,
            reset_timeout=config.cb_reset_timeout,
        )

        logger.debug(f"Backend initialized for {self.base_url}")

    def _validate_config(self) -> None:
        if not self.config.api_key:
            logger.warning("No API key provided - requests will not be authenticated")

        if not self.config.base_url:
            raise ConfigurationError("base_url is required")

        if self.config.timeout_connect <= 0:
            raise ConfigurationError("timeout_connect must be positive")

        if self.config.timeout_read <= 0:
            raise ConfigurationError("timeout_read must be positive")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """
        Decode a response, raising APIError for error statuses

        Error bodies look like ``{"error": {"type": ..., "code": ..., "message": ...}}``.
        """
        request_id = response.headers.get(REQUEST_ID_HEADER)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = body.get("error", {}) if isinstance(body, dict) else {}
            if not isinstance(error, dict):
                error = {"message": str(error)}
            raise APIError(
                status_code=response.status_code,
                message=error.get("message") or response.reason or "Unknown error",
                body=body if isinstance(body, dict) else {"raw": response.text},
                request_id=request_id,
                error_type=error.get("type"),
                code=error.get("code"),
            )

        if not isinstance(body, dict):
            raise APIError(
                status_code=response.status_code,
                message="Invalid JSON in response body",
                body={"raw": response.text},
                request_id=request_id,
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Response ({response.status_code}): {sanitize_for_logging(body)}",
                extra={"request_id": request_id},
            )

        return body

    def _send(
        self,
        method: str,
        path: str,
        api_key: Optional[str],
        body: QueryBody,
    ) -> Tuple[int, Dict[str, Any]]:
        url = self._url(path)
        headers = self.headers.copy()

        key = api_key or self.config.api_key
        if key:
            headers["Authorization"] = f"Bearer {key}"

        timeout = (self.config.timeout_connect, self.config.timeout_read)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"{method} {url}: {sanitize_for_logging(body)}")

        try:
            if method == "GET":
                response = self.session.request(
                    method, url, headers=headers, params=body or None, timeout=timeout
                )
            else:
                headers["Content-Type"] = "application/x-www-form-urlencoded"
                response = self.session.request(
                    method, url, headers=headers, data=body, timeout=timeout
                )
        except Timeout as e:
            logger.error(f"Request timeout: {e}")
            raise ChargekitTimeoutError(f"Request timed out: {e}") from e
        except RequestException as e:
            logger.error(f"Network error: {e}")
            raise NetworkError(f"Network error: {e}") from e

        return response.status_code, self._handle_response(response)

    def call(
        self,
        method: str,
        path: str,
        api_key: Optional[str] = None,
        body: Optional[QueryBody] = None,
        endpoint: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Perform one API call

        Args:
            method: HTTP method
            path: Path relative to the base URL
            api_key: Per-call API key, defaults to the configured key
            body: Form body as ordered (key, value) pairs
            endpoint: Logical endpoint name for metrics and logs

        Returns:
            Decoded JSON object

        Raises:
            APIError: If the API returns an error or an undecodable body
            NetworkError: If a network error occurs
            TimeoutError: If the request times out
            CircuitBreakerError: If the circuit is open
        """
        endpoint = endpoint or f"{method} {path}"
        start = time.time()

        try:
            status, result = self.cb.call(self._send, method, path, api_key, list(body or []))
        except Exception as e:
            metrics_request(endpoint, getattr(e, "status_code", 0), time.time() - start)
            raise

        latency = time.time() - start
        metrics_request(endpoint, status, latency)
        logger.info(
            f"{endpoint} succeeded",
            extra={
                "endpoint": endpoint,
                "method": method,
                "path": path,
                "status": status,
                "latency": latency,
            },
        )
        return result
