"""
Tests for AbstractApi - request helpers shared by API classes

Tests cover:
- get/post/put/delete wiring between RequestBuilder and transport
- Response decoding
- Path encoding for project and group identifiers
- Upload failures stopping the request
"""

from unittest.mock import Mock

import pytest

from gitlab_api.api import AbstractApi
from gitlab_api.client import Client
from gitlab_api.config import Config
from gitlab_api.exceptions import ResourceAccessError, TransportError, ValidationError
from gitlab_api.multipart import MultipartStream
from gitlab_api.request_builder import FORM_CONTENT_TYPE, RequestBuilder
from tests.test_helpers import create_mock_http_client, create_response


@pytest.fixture
def api(client):
    return AbstractApi(client)


class TestRequestHelpers:
    """Test the HTTP verb helpers"""

    def test_get_appends_query_and_decodes(self, api, mock_http_client):
        """Should put parameters in the path and decode JSON"""
        mock_http_client.get.return_value = create_response(json_body=[{"id": 1}])

        result = api.get("projects", {"page": 2, "search": "demo"})

        mock_http_client.get.assert_called_once_with("projects?page=2&search=demo", {})
        assert result == [{"id": 1}]

    def test_get_as_response_returns_raw_response(self, api, mock_http_client):
        response = create_response(json_body={"id": 1}, headers={"X-Total": "1"})
        mock_http_client.get.return_value = response

        assert api.get_as_response("projects/1", headers={"Accept": "*/*"}) is response
        mock_http_client.get.assert_called_once_with("projects/1", {"Accept": "*/*"})

    def test_post_form_body(self, api, mock_http_client):
        """Should send a URL-encoded body"""
        mock_http_client.post.return_value = create_response(201, json_body={"iid": 5})

        result = api.post("projects/1/issues", {"title": "Bug"})

        mock_http_client.post.assert_called_once_with(
            "projects/1/issues", {"Content-Type": FORM_CONTENT_TYPE}, b"title=Bug"
        )
        assert result == {"iid": 5}

    def test_post_without_parameters_sends_no_body(self, api, mock_http_client):
        api.post("projects/1/star")

        mock_http_client.post.assert_called_once_with("projects/1/star", {}, None)

    def test_post_with_file_is_multipart(self, api, mock_http_client, upload_file):
        """Should upload files as multipart with the client's boundary"""
        sent = []
        mock_http_client.post.side_effect = lambda path, headers, body: (
            sent.append((path, headers, body.read())) or create_response(201, json_body={})
        )

        api.post("projects/1/uploads", files={"file": str(upload_file)})

        path, headers, content = sent[0]
        assert path == "projects/1/uploads"
        assert headers == {"Content-Type": "multipart/form-data; boundary=test-boundary"}
        assert b'filename="notes.txt"' in content
        assert b"release notes\n" in content

    def test_put_with_file_and_parameters(self, api, mock_http_client, upload_file):
        sent = []
        mock_http_client.put.side_effect = lambda path, headers, body: (
            sent.append((headers, body.read())) or create_response(json_body={})
        )

        api.put("projects/1", {"name": "renamed"}, files={"avatar": str(upload_file)})

        headers, content = sent[0]
        assert headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="name"\r\n\r\nrenamed' in content
        assert b'name="avatar"; filename="notes.txt"' in content

    def test_upload_body_closed_after_send(self, api, mock_http_client, upload_file):
        """Should release the upload stream even if the transport never read it"""
        api.post("projects/1/uploads", files={"file": str(upload_file)})

        body = mock_http_client.post.call_args[0][2]
        assert isinstance(body, MultipartStream)
        assert body.closed

    def test_upload_body_closed_after_transport_error(self, api, mock_http_client, upload_file):
        """Should release the upload stream when the request fails"""
        mock_http_client.put.side_effect = TransportError("HTTP 500", status_code=500)

        with pytest.raises(TransportError):
            api.put("projects/1", files={"avatar": str(upload_file)})

        body = mock_http_client.put.call_args[0][2]
        assert body.closed

    def test_delete_appends_query(self, api, mock_http_client):
        mock_http_client.delete.return_value = create_response(204, text="")

        result = api.delete("projects/1/hooks/3", {"force": True})

        mock_http_client.delete.assert_called_once_with("projects/1/hooks/3?force=1", {})
        assert result == ""

    def test_missing_upload_sends_nothing(self, api, mock_http_client, tmp_path):
        """Should fail before any transport call"""
        with pytest.raises(ResourceAccessError, match="missing.png"):
            api.post("projects/1/uploads", files={"file": str(tmp_path / "missing.png")})

        mock_http_client.post.assert_not_called()

    def test_transport_errors_propagate(self, api, mock_http_client):
        """Should not interpret or swallow transport errors"""
        error = TransportError("HTTP 403", status_code=403)
        mock_http_client.get.side_effect = error

        with pytest.raises(TransportError) as exc_info:
            api.get("projects/1")

        assert exc_info.value is error

    def test_injected_request_builder(self, client, mock_http_client):
        """Should use the builder passed in instead of creating one"""
        builder = Mock(spec=RequestBuilder)
        builder.build.return_value = ("built/path", {"X-Built": "1"}, None)

        AbstractApi(client, request_builder=builder).get("projects")

        builder.build.assert_called_once_with("GET", "projects", None, headers=None)
        mock_http_client.get.assert_called_once_with("built/path", {"X-Built": "1"})

    def test_configure_returns_self(self, api):
        assert api.configure() is api


class TestPathEncoding:
    """Test identifier encoding in paths"""

    def test_period_is_escaped(self, api):
        """Should encode 1.2 as 1%2E2"""
        assert api.get_project_path("1.2", "issues") == "projects/1%2E2/issues"

    def test_namespaced_path(self, api):
        """Should keep a namespaced path in one segment"""
        assert (
            api.get_project_path("my-group/my.project", "repository/files")
            == "projects/my-group%2Fmy%2Eproject/repository/files"
        )

    def test_numeric_id(self, api):
        assert api.get_project_path(42, "merge_requests") == "projects/42/merge_requests"

    def test_group_path(self, api):
        assert api.get_group_path("parent/child", "members") == "groups/parent%2Fchild/members"

    def test_encode_path_reserved_characters(self):
        assert AbstractApi.encode_path("a b+c") == "a%20b%2Bc"


class TestOptionsResolver:
    """Test the pagination options resolver"""

    def test_per_page_100_accepted(self, api):
        assert api.create_options_resolver().resolve({"per_page": 100}) == {"per_page": 100}

    def test_per_page_101_rejected_before_request(self, api, mock_http_client):
        """Should fail validation before anything is sent"""
        with pytest.raises(ValidationError):
            api.get("projects", api.create_options_resolver().resolve({"per_page": 101}))

        mock_http_client.get.assert_not_called()

    def test_page_zero_rejected(self, api):
        with pytest.raises(ValidationError):
            api.create_options_resolver().resolve({"page": 0})

    def test_resolver_extensible(self, api):
        """Should let subclasses define more options"""
        resolver = api.create_options_resolver().define("state", str)

        assert resolver.resolve({"state": "opened", "page": 1}) == {"state": "opened", "page": 1}

    def test_per_page_ceiling_ignores_configuration(self):
        """Should keep the server's limit of 100 whatever the configuration says"""
        config_obj = Config({"client": {"pagination": {"per_page": 20, "max_per_page": 500}}})
        client = Client(http_client=create_mock_http_client(), config_obj=config_obj)
        resolver = AbstractApi(client).create_options_resolver()

        assert resolver.resolve({"per_page": 100}) == {"per_page": 100}
        with pytest.raises(ValidationError):
            resolver.resolve({"per_page": 101})
