"""Pytest configuration and shared fixtures for all tests."""

from unittest.mock import Mock

import pytest
import requests

from license_vetting.content_id import ContentId


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def left_pad():
    return ContentId("npm", "npmjs", "-", "left-pad", "1.3.0")


@pytest.fixture
def code_frame():
    return ContentId("npm", "npmjs", "babel", "code-frame", "7.10.4")


@pytest.fixture
def commons_lang():
    return ContentId("maven", "mavencentral", "org.apache.commons", "commons-lang3", "3.12.0")


@pytest.fixture
def make_response():
    """Factory for mock responses answering ``payload`` as JSON (or raising it)."""

    def _make(status_code=200, payload=None):
        response = Mock()
        response.status_code = status_code
        if isinstance(payload, Exception):
            response.json.side_effect = payload
        else:
            response.json.return_value = payload
        return response

    return _make
