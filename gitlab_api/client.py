"""
Client for the GitLab REST API

Composes the transport, MIME sniffer and multipart boundary factory that
API classes are built from. All collaborators are injected; defaults are
created from configuration.
"""

from collections.abc import Callable

from .config import Config, config
from .http_client import HttpClient
from .logging_config import get_module_logger
from .mime import MimeSniffer

logger = get_module_logger("client")

AUTH_HTTP_TOKEN = "http_token"
AUTH_OAUTH_TOKEN = "oauth_token"
AUTH_JOB_TOKEN = "job_token"

AUTH_HEADERS = ("PRIVATE-TOKEN", "Authorization", "JOB-TOKEN", "Sudo")


class Client:
    """
    Entry point holding the shared collaborators of all API classes
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        config_obj: Config | None = None,
        mime_sniffer: MimeSniffer | None = None,
        boundary_factory: Callable[[], str] | None = None,
    ):
        """
        Initialize the client

        Args:
            http_client: Transport (built from config if None)
            config_obj: Config object (uses global config if None)
            mime_sniffer: Content-Type sniffer for uploads (octet-stream for all if None)
            boundary_factory: Multipart boundary generator (random if None)
        """
        self.config = config_obj or config
        self.http_client = http_client or self._create_http_client(
            self.config.get_required("client.base_url")
        )
        self.mime_sniffer = mime_sniffer
        self.boundary_factory = boundary_factory

    @classmethod
    def create_with_http_client(cls, http_client: HttpClient) -> "Client":
        """Create a client around an existing transport"""
        return cls(http_client=http_client)

    def _create_http_client(self, url: str) -> HttpClient:
        api_version = self.config.get("client.api_version", "api/v4")
        headers = {}
        user_agent = self.config.get("client.user_agent")
        if user_agent:
            headers["User-Agent"] = user_agent

        return HttpClient(
            base_url=f"{url.rstrip('/')}/{api_version.strip('/')}",
            default_headers=headers,
            timeout=self.config.get("client.timeouts.request"),
        )

    def get_http_client(self) -> HttpClient:
        return self.http_client

    def authenticate(self, token: str, method: str, sudo: str | None = None) -> "Client":
        """
        Authenticate all subsequent requests

        Args:
            token: Personal access, OAuth or CI job token
            method: AUTH_HTTP_TOKEN, AUTH_OAUTH_TOKEN or AUTH_JOB_TOKEN
            sudo: Optional user name or id to impersonate

        Raises:
            ValueError: For an unknown authentication method
        """
        if method == AUTH_HTTP_TOKEN:
            header = ("PRIVATE-TOKEN", token)
        elif method == AUTH_OAUTH_TOKEN:
            header = ("Authorization", f"Bearer {token}")
        elif method == AUTH_JOB_TOKEN:
            header = ("JOB-TOKEN", token)
        else:
            raise ValueError(f"Unknown authentication method: {method}")

        for name in AUTH_HEADERS:
            self.http_client.remove_header(name)

        self.http_client.add_header(*header)
        if sudo is not None:
            self.http_client.add_header("Sudo", str(sudo))

        logger.debug(f"Authenticated using {method}")
        return self

    def set_url(self, url: str) -> "Client":
        """Point the client at another server, keeping its headers"""
        api_version = self.config.get("client.api_version", "api/v4")
        self.http_client.base_url = f"{url.rstrip('/')}/{api_version.strip('/')}"
        return self
