"""HTTP transport used by the API classes, injectable for testing."""

from typing import Any

import requests

from .exceptions import ApiLimitExceededError, TransportError
from .logging_config import get_module_logger
from .response_mediator import ResponseMediator

logger = get_module_logger("http_client")


class HttpClient:
    """
    HTTP transport wrapping a requests.Session.

    This abstraction enables:
    - Dependency injection for testing
    - Easy mocking in unit tests
    - Centralized HTTP configuration (base URL, default headers, timeout)

    Error responses (status >= 400) and network failures are raised as
    TransportError; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        default_headers: dict[str, str] | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the transport

        Args:
            base_url: Root of the API (e.g., "https://gitlab.com/api/v4")
            default_headers: Headers sent with every request
            timeout: Request timeout in seconds (None for no timeout)
            session: Optional requests.Session (a new one is created if None)
        """
        self.base_url = base_url.rstrip("/")
        self.default_headers = dict(default_headers or {})
        self.timeout = timeout
        self.session = session or requests.Session()

    def add_header(self, name: str, value: str) -> None:
        """Send a header with every subsequent request"""
        self.default_headers[name] = value

    def remove_header(self, name: str) -> None:
        self.default_headers.pop(name, None)

    def get(self, path: str, headers: dict[str, str] | None = None) -> requests.Response:
        """Send a GET request"""
        return self.send("GET", path, headers)

    def post(
        self, path: str, headers: dict[str, str] | None = None, body: Any | None = None
    ) -> requests.Response:
        """Send a POST request with an already encoded body"""
        return self.send("POST", path, headers, body)

    def put(
        self, path: str, headers: dict[str, str] | None = None, body: Any | None = None
    ) -> requests.Response:
        """Send a PUT request with an already encoded body"""
        return self.send("PUT", path, headers, body)

    def delete(self, path: str, headers: dict[str, str] | None = None) -> requests.Response:
        """Send a DELETE request"""
        return self.send("DELETE", path, headers)

    def build_url(self, path: str) -> str:
        """Resolve a path against the base URL; absolute URLs pass through"""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        body: Any | None = None,
    ) -> requests.Response:
        """
        Send a request and check its status

        Args:
            method: HTTP method
            path: Path relative to base_url, or an absolute URL
            headers: Per-call headers, taking precedence over default headers
            body: Encoded body (bytes, file-like or iterable) or None

        Returns:
            requests.Response object

        Raises:
            TransportError: On network failure or an error status
            ApiLimitExceededError: On HTTP 429
        """
        url = self.build_url(path)
        merged_headers = {**self.default_headers, **(headers or {})}

        logger.debug(f"Request: {method} {url}")

        try:
            response = self.session.request(
                method, url, headers=merged_headers, data=body, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error on {method} {url}: {e}")
            raise TransportError(f"Network error on {method} {url}: {e}") from e

        if response.status_code >= 400:
            message = ResponseMediator.get_error_message(response) or response.reason
            error_msg = f"HTTP {response.status_code} on {method} {url}: {message}"
            logger.error(error_msg)

            error_class = ApiLimitExceededError if response.status_code == 429 else TransportError
            raise error_class(
                error_msg,
                status_code=response.status_code,
                response_text=response.text,
            )

        return response
