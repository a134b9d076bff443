"""
Pytest configuration and shared fixtures
"""

import pytest

from gitlab_api.client import Client
from gitlab_api.config import Config
from tests.test_helpers import create_mock_http_client


@pytest.fixture
def test_config():
    """Minimal client configuration"""
    return Config(
        {
            "client": {
                "base_url": "https://gitlab.example.com",
                "api_version": "api/v4",
                "user_agent": "gitlab-api-client-tests/1.0",
                "timeouts": {"request": 15},
                "pagination": {"per_page": 20},
            }
        }
    )


@pytest.fixture
def mock_http_client():
    """Mock transport answering every verb with an empty JSON object"""
    return create_mock_http_client()


@pytest.fixture
def client(mock_http_client, test_config):
    """Client wired to the mock transport"""
    return Client(
        http_client=mock_http_client,
        config_obj=test_config,
        boundary_factory=lambda: "test-boundary",
    )


@pytest.fixture
def upload_file(tmp_path):
    """A small text file on disk ready for upload"""
    path = tmp_path / "notes.txt"
    path.write_text("release notes\n", encoding="utf-8")
    return path
