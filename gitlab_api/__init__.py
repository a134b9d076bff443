"""
gitlab-api-client - typed request helpers for the GitLab REST API
"""

from .api import AbstractApi
from .client import AUTH_HTTP_TOKEN, AUTH_JOB_TOKEN, AUTH_OAUTH_TOKEN, Client
from .exceptions import (
    ApiLimitExceededError,
    ConfigurationError,
    GitlabApiError,
    ResourceAccessError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .mime import MimeSniffer, MimetypesSniffer, OctetStreamSniffer
from .pager import ResultPager
from .request_builder import EncodedBody, RequestBuilder, RequestSpec
from .response_mediator import ResponseMediator

__all__ = [
    "AUTH_HTTP_TOKEN",
    "AUTH_JOB_TOKEN",
    "AUTH_OAUTH_TOKEN",
    "AbstractApi",
    "ApiLimitExceededError",
    "Client",
    "ConfigurationError",
    "EncodedBody",
    "GitlabApiError",
    "HttpClient",
    "MimeSniffer",
    "MimetypesSniffer",
    "OctetStreamSniffer",
    "RequestBuilder",
    "RequestSpec",
    "ResourceAccessError",
    "ResponseMediator",
    "ResultPager",
    "TransportError",
    "ValidationError",
]
