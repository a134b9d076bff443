"""
Custom exceptions for gitlab-api-client
"""

from typing import Any


class GitlabApiError(Exception):
    """Base exception for all gitlab-api-client errors"""

    pass


class ResourceAccessError(GitlabApiError):
    """
    Raised when a file declared for a multipart upload cannot be opened.

    Fatal for the current request: nothing is sent to the transport.
    """

    def __init__(self, filename: str, mode: str, reason: str | None = None):
        self.filename = filename
        self.mode = mode
        self.reason = reason

        message = f"Unable to open {filename} using mode {mode}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ValidationError(GitlabApiError):
    """
    Raised when request options fail validation.

    This includes:
    - Undefined option names
    - Values of the wrong type
    - Values rejected by the option's validator (e.g. per_page > 100)
    """

    def __init__(self, message: str, option: str | None = None, value: Any = None):
        self.option = option
        self.value = value
        super().__init__(message)


class TransportError(GitlabApiError):
    """
    Raised by the HTTP transport for network failures and error responses.

    status_code is None when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code is not None and self.status_code >= 500

    def get_user_guidance(self) -> str:
        """Get user-friendly guidance based on status code"""
        if self.status_code is None:
            return "Could not reach the server. Please check the base URL and your network."
        elif self.status_code == 401:
            return "Authentication failed. Please check your access token."
        elif self.status_code == 403:
            return "The token does not have permission to perform this action."
        elif self.status_code == 404:
            return "The requested resource was not found. Check the project or group path."
        elif self.status_code in (400, 422):
            return "The request was rejected as invalid. Check the submitted parameters."
        elif self.status_code == 429:
            return "Rate limit exceeded. Please wait a few moments and try again."
        elif self.is_server_error:
            return "Server error. This is usually temporary, please try again later."
        else:
            return "Please check your client configuration and try again."


class ApiLimitExceededError(TransportError):
    """Raised when the server answers with HTTP 429"""

    pass


class ConfigurationError(GitlabApiError):
    """
    Raised when required configuration values are missing or invalid.
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")
