"""
Base class for the per-resource API classes
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import requests

from ..multipart import MultipartStream
from ..options import OptionsResolver, create_pagination_resolver
from ..request_builder import RequestBuilder
from ..response_mediator import ResponseMediator

if TYPE_CHECKING:
    from ..client import Client


class AbstractApi:
    """
    Shared request helpers for API classes

    Subclasses describe endpoints; this class builds each request through
    a RequestBuilder, sends it with the client's transport and decodes the
    response with ResponseMediator.
    """

    def __init__(self, client: "Client", request_builder: RequestBuilder | None = None):
        """
        Args:
            client: Client providing the transport and upload collaborators
            request_builder: Optional builder (created from the client if None)
        """
        self.client = client
        self.request_builder = request_builder or RequestBuilder(
            mime_sniffer=client.mime_sniffer,
            boundary_factory=client.boundary_factory,
        )

    def configure(self) -> "AbstractApi":
        return self

    def get_as_response(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> requests.Response:
        """Perform a GET request and return the raw response"""
        final_path, final_headers, _ = self.request_builder.build(
            "GET", path, parameters, headers=headers
        )
        return self.client.get_http_client().get(final_path, final_headers)

    def get(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return ResponseMediator.get_content(self.get_as_response(path, parameters, headers))

    def post(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        files: Mapping[str, str] | None = None,
    ) -> Any:
        """
        Perform a POST request

        Args:
            path: Resource path
            parameters: Form fields
            headers: Extra request headers
            files: Field name -> local file path, sent as multipart upload

        Raises:
            ResourceAccessError: If an upload file cannot be opened
        """
        response = self._send_with_body("POST", path, parameters, headers, files)
        return ResponseMediator.get_content(response)

    def put(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        files: Mapping[str, str] | None = None,
    ) -> Any:
        """Perform a PUT request (same body rules as post())"""
        response = self._send_with_body("PUT", path, parameters, headers, files)
        return ResponseMediator.get_content(response)

    def delete(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        final_path, final_headers, _ = self.request_builder.build(
            "DELETE", path, parameters, headers=headers
        )
        response = self.client.get_http_client().delete(final_path, final_headers)
        return ResponseMediator.get_content(response)

    def _send_with_body(
        self,
        method: str,
        path: str,
        parameters: Mapping[str, Any] | None,
        headers: Mapping[str, str] | None,
        files: Mapping[str, str] | None,
    ) -> requests.Response:
        final_path, final_headers, body = self.request_builder.build(
            method, path, parameters, files, headers
        )
        send = getattr(self.client.get_http_client(), method.lower())
        try:
            return send(final_path, final_headers, body)
        finally:
            # Upload handles belong to this request only
            if isinstance(body, MultipartStream):
                body.close()

    def get_project_path(self, project_id: int | str, path: str) -> str:
        return f"projects/{self.encode_path(project_id)}/{path}"

    def get_group_path(self, group_id: int | str, path: str) -> str:
        return f"groups/{self.encode_path(group_id)}/{path}"

    @staticmethod
    def encode_path(value: int | str) -> str:
        """
        Encode an identifier for use as a single path segment

        "/" becomes %2F and "." becomes %2E so that "group/my.project" is
        routed as one segment without a file extension.
        """
        return quote(str(value), safe="").replace(".", "%2E")

    def create_options_resolver(self) -> OptionsResolver:
        """Resolver accepting page and per_page, for subclasses to extend"""
        return create_pagination_resolver()
