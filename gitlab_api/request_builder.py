"""
Request construction for the REST API

Turns a path, parameters, named upload files and caller headers into the
final (path, headers, body) triple handed to the transport:

- GET/DELETE: parameters go into the query string, never into a body
- POST/PUT with files: multipart/form-data body
- POST/PUT with parameters only: application/x-www-form-urlencoded body
- POST/PUT with neither: no body and no Content-Type
"""

import os
from collections.abc import Callable, Mapping
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import IO, Any

from urllib3.filepost import choose_boundary

from . import query_string
from .exceptions import ResourceAccessError
from .logging_config import get_module_logger
from .mime import MimeSniffer, OctetStreamSniffer, sniff_or_default
from .multipart import MultipartStream

logger = get_module_logger("request_builder")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
QUERY_METHODS = ("GET", "DELETE")
BODY_METHODS = ("POST", "PUT")


@dataclass
class RequestSpec:
    """One outgoing call, as described by the caller. Consumed once."""

    method: str
    path: str
    parameters: Mapping[str, Any] = field(default_factory=dict)
    files: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EncodedBody:
    """Final wire body together with its declared content type

    content is raw bytes for form bodies and a MultipartStream for uploads.
    """

    content: bytes | MultipartStream
    content_type: str


def open_for_upload(filename: str, mode: str = "rb") -> IO[bytes]:
    """
    Open a file that is about to be uploaded

    Raises:
        ResourceAccessError: If the file does not exist or cannot be read
    """
    try:
        return open(filename, mode)
    except OSError as e:
        raise ResourceAccessError(filename, mode, e.strerror or str(e)) from e


class RequestBuilder:
    """
    Builds the final path, headers and body of a request

    Holds no per-request state, so one instance can be shared between
    threads. Collaborators are injected:

    - mime_sniffer: guesses Content-Type of uploaded files
    - boundary_factory: produces multipart boundaries
    """

    def __init__(
        self,
        mime_sniffer: MimeSniffer | None = None,
        boundary_factory: Callable[[], str] | None = None,
    ):
        self.mime_sniffer = mime_sniffer or OctetStreamSniffer()
        self.boundary_factory = boundary_factory or choose_boundary

    def build(
        self,
        method: str,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        files: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> tuple[str, dict[str, str], bytes | MultipartStream | None]:
        """
        Build a request

        Args:
            method: One of GET, POST, PUT, DELETE
            path: Resource path without query string
            parameters: Query (GET/DELETE) or body (POST/PUT) parameters
            files: Field name -> local file path, POST/PUT only
            headers: Caller headers; Content-Type may be overridden

        Returns:
            tuple of (final_path, final_headers, body)

        Raises:
            ValueError: For unsupported methods or files on GET/DELETE
            ResourceAccessError: If an upload file cannot be opened
        """
        spec = RequestSpec(
            method=method.upper(),
            path=path,
            parameters=parameters or {},
            files=files or {},
            headers=headers or {},
        )
        return self.build_spec(spec)

    def build_spec(
        self, spec: RequestSpec
    ) -> tuple[str, dict[str, str], bytes | MultipartStream | None]:
        """Build a request from a RequestSpec (see build())"""
        final_headers = dict(spec.headers)

        if spec.method in QUERY_METHODS:
            if spec.files:
                raise ValueError(f"Files cannot be sent with a {spec.method} request")
            return self.prepare_path(spec.path, spec.parameters), final_headers, None

        if spec.method not in BODY_METHODS:
            raise ValueError(f"Unsupported HTTP method: {spec.method}")

        body = self.encode_body(spec.parameters, spec.files)
        if body is None:
            return spec.path, final_headers, None

        _set_content_type(final_headers, body.content_type)
        return spec.path, final_headers, body.content

    def prepare_path(self, path: str, parameters: Mapping[str, Any] | None = None) -> str:
        """Append parameters to the path as a query string"""
        if parameters:
            path = f"{path}?{query_string.build(parameters)}"
        return path

    def encode_body(
        self, parameters: Mapping[str, Any], files: Mapping[str, str]
    ) -> EncodedBody | None:
        """
        Encode a POST/PUT body

        Returns:
            EncodedBody, or None when there is nothing to send
        """
        if files:
            return self._encode_multipart(parameters, files)
        if parameters:
            raw = query_string.build(parameters)
            return EncodedBody(content=raw.encode("ascii"), content_type=FORM_CONTENT_TYPE)
        return None

    def _encode_multipart(
        self, parameters: Mapping[str, Any], files: Mapping[str, str]
    ) -> EncodedBody:
        stream = MultipartStream(self.boundary_factory())
        for name, value in query_string.flatten(parameters):
            stream.add_field(name, value)

        # Until the stream takes ownership, a failed open closes the earlier handles
        with ExitStack() as stack:
            for name, filename in files.items():
                handle = stack.enter_context(open_for_upload(filename))
                stream.add_file(
                    name,
                    handle,
                    filename=os.path.basename(filename),
                    content_type=sniff_or_default(self.mime_sniffer, filename),
                )
            stack.pop_all()

        stream.finish()
        logger.debug(f"Prepared multipart body: {len(files)} file(s), {len(stream)} bytes")
        return EncodedBody(content=stream, content_type=stream.content_type)


def _set_content_type(headers: dict[str, str], content_type: str) -> None:
    for name in [key for key in headers if key.lower() == "content-type"]:
        del headers[name]
    headers["Content-Type"] = content_type
