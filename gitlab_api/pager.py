"""
Pagination over list endpoints using the Link response header
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .logging_config import get_module_logger
from .options import create_pagination_resolver
from .response_mediator import ResponseMediator

if TYPE_CHECKING:
    from .api.abstract_api import AbstractApi
    from .client import Client

logger = get_module_logger("pager")

PAGINATION_OPTIONS = ("page", "per_page")


class ResultPager:
    """
    Fetches pages of a list endpoint and follows next/prev/first/last links

    Example:
        >>> pager = ResultPager(client, per_page=100)
        >>> issues = pager.fetch_all(api, api.get_project_path(42, "issues"))
    """

    def __init__(self, client: "Client", per_page: int | None = None):
        """
        Args:
            client: Client whose transport follows pagination links
            per_page: Page size, 1..100 (defaults to client.pagination.per_page)

        Raises:
            ValidationError: If per_page is out of range
        """
        self.client = client
        if per_page is None:
            per_page = client.config.get("client.pagination.per_page", 50)
        self.per_page = create_pagination_resolver().resolve({"per_page": per_page})["per_page"]
        self.pagination: dict[str, str] = {}

    def fetch(
        self, api: "AbstractApi", path: str, parameters: Mapping[str, Any] | None = None
    ) -> Any:
        """
        Fetch the first page and remember its pagination links

        A page or per_page given in parameters is validated and takes
        precedence over the pager's per_page.

        Raises:
            ValidationError: If parameters hold an invalid page or per_page
        """
        parameters = dict(parameters or {})
        parameters.update(
            create_pagination_resolver().resolve(
                {key: parameters[key] for key in PAGINATION_OPTIONS if key in parameters}
            )
        )
        parameters.setdefault("per_page", self.per_page)

        response = api.get_as_response(path, parameters)
        self.pagination = ResponseMediator.get_pagination(response)
        return ResponseMediator.get_content(response)

    def fetch_all(
        self, api: "AbstractApi", path: str, parameters: Mapping[str, Any] | None = None
    ) -> list:
        """
        Fetch every page and concatenate the results

        Raises:
            TypeError: If the endpoint does not return a list
        """
        results = _as_list(self.fetch(api, path, parameters), path)
        while self.has_next():
            results.extend(_as_list(self.fetch_next(), path))

        logger.debug(f"Fetched {len(results)} item(s) from {path}")
        return results

    def has_next(self) -> bool:
        return "next" in self.pagination

    def has_previous(self) -> bool:
        return "prev" in self.pagination

    def fetch_next(self) -> Any:
        return self._fetch_relation("next")

    def fetch_previous(self) -> Any:
        return self._fetch_relation("prev")

    def fetch_first(self) -> Any:
        return self._fetch_relation("first")

    def fetch_last(self) -> Any:
        return self._fetch_relation("last")

    def _fetch_relation(self, relation: str) -> Any:
        url = self.pagination.get(relation)
        if url is None:
            raise ValueError(f"Pagination of type '{relation}' is not available")

        response = self.client.get_http_client().get(url)
        self.pagination = ResponseMediator.get_pagination(response)
        return ResponseMediator.get_content(response)


def _as_list(content: Any, path: str) -> list:
    if not isinstance(content, list):
        raise TypeError(f"Expected a list from {path}, got {type(content).__name__}")
    return list(content)
