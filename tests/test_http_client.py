"""Tests for http_client module."""

import re
import unittest

import requests

from license_vetting.http_client import USER_AGENT, create_session, get_default_headers


class TestUserAgent(unittest.TestCase):
    """Tests for USER_AGENT constant."""

    def test_user_agent_has_version(self):
        """Test USER_AGENT has the form license-vetting/<version>."""
        name, version_part = USER_AGENT.split("/")
        self.assertEqual(name, "license-vetting")
        version_pattern = r"^\d+\.\d+(\.\d+)?(-[\w.]+)?$"
        self.assertTrue(
            re.match(version_pattern, version_part) is not None or version_part == "unknown",
            f"Version '{version_part}' is neither a valid version pattern nor 'unknown'",
        )


class TestGetDefaultHeaders(unittest.TestCase):
    """Tests for get_default_headers function."""

    def test_default_headers_minimal(self):
        headers = get_default_headers()
        self.assertEqual(headers["User-Agent"], USER_AGENT)
        self.assertEqual(headers["Accept"], "application/json")
        self.assertNotIn("Authorization", headers)
        self.assertNotIn("Content-Type", headers)

    def test_default_headers_with_token(self):
        headers = get_default_headers(token="test-token-123")
        self.assertEqual(headers["Authorization"], "Bearer test-token-123")

    def test_default_headers_with_content_type(self):
        headers = get_default_headers(content_type="application/json")
        self.assertEqual(headers["Content-Type"], "application/json")


class TestCreateSession(unittest.TestCase):
    """Tests for create_session function."""

    def test_session_carries_default_headers(self):
        session = create_session()
        self.assertIsInstance(session, requests.Session)
        self.assertEqual(session.headers["User-Agent"], USER_AGENT)
