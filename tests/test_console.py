"""Tests for the console module."""

import os
import sys
import unittest
from unittest.mock import patch

from license_vetting import console as c
from license_vetting.console import (
    IS_CI,
    IS_GITHUB_ACTIONS,
    console,
    custom_theme,
    gha_error,
    gha_group,
    gha_warning,
    print_review_hint,
    print_summary_table,
    redirect_to_stderr,
)


class TestCIDetection(unittest.TestCase):
    """Tests for CI environment detection."""

    def test_flags_are_booleans(self):
        self.assertIsInstance(IS_CI, bool)
        self.assertIsInstance(IS_GITHUB_ACTIONS, bool)

    def test_github_actions_implies_ci(self):
        if IS_GITHUB_ACTIONS:
            self.assertTrue(IS_CI)


class TestTheme(unittest.TestCase):
    """Tests for the status styles."""

    def test_status_styles_defined(self):
        for status in ("approved", "restricted", "needs-review"):
            self.assertIn(status, custom_theme.styles)

    def test_console_uses_theme(self):
        self.assertIsNotNone(console.get_style("needs-review"))


class TestGHAAnnotations(unittest.TestCase):
    """Tests for GitHub Actions annotation functions."""

    @patch.dict(os.environ, {"GITHUB_ACTIONS": "false"}, clear=False)
    def test_gha_warning_local(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", False), patch.object(c.console, "print") as mock_print:
            gha_warning("Test warning", title="Warning Title")
        self.assertIn("Warning Title", mock_print.call_args[0][0])

    @patch.dict(os.environ, {"GITHUB_ACTIONS": "false"}, clear=False)
    def test_gha_error_local(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", False), patch.object(c.console, "print") as mock_print:
            gha_error("Test error")
        self.assertIn("Test error", mock_print.call_args[0][0])

    def test_gha_warning_gha_mode(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            c.gha_warning("Test warning")
        mock_print.assert_called_with("::warning::Test warning")

    def test_gha_error_gha_mode_with_title(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            c.gha_error("Test error", title="Input error")
        mock_print.assert_called_with("::error title=Input error::Test error")


class TestGHAGroup(unittest.TestCase):
    """Tests for gha_group context manager."""

    def test_gha_group_local(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", False), patch("builtins.print") as mock_print:
            with gha_group("Test Group"):
                pass
        mock_print.assert_not_called()

    def test_gha_group_gha_mode(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            with c.gha_group("Test Group"):
                pass
        self.assertEqual(
            [call.args[0] for call in mock_print.call_args_list], ["::group::Test Group", "::endgroup::"]
        )


class TestRedirectToStderr(unittest.TestCase):
    """Tests for moving console output off stdout."""

    def test_console_writes_to_stderr_while_active(self):
        with redirect_to_stderr():
            self.assertIs(console.file, sys.stderr)
        self.assertFalse(console.stderr)

    def test_disabled_is_a_no_op(self):
        with redirect_to_stderr(False):
            self.assertFalse(console.stderr)

    def test_workflow_commands_follow_the_console(self):
        with patch.object(c, "IS_GITHUB_ACTIONS", True), patch("builtins.print") as mock_print:
            with redirect_to_stderr():
                c.gha_warning("Test warning")
        mock_print.assert_called_with("::warning::Test warning", file=sys.stderr)


class TestSummaryTable(unittest.TestCase):
    """Tests for summary table function."""

    def test_summary_table_with_data(self):
        with patch.object(c.console, "print") as mock_print:
            print_summary_table("Test Summary", [("Approved", 10), ("Needs review", 2)])
        mock_print.assert_called_once()

    def test_summary_table_empty(self):
        with patch.object(c.console, "print") as mock_print:
            print_summary_table("Test Summary", [])
        mock_print.assert_not_called()

    def test_summary_table_filters_zeros(self):
        with patch.object(c.console, "print") as mock_print:
            print_summary_table("Test Summary", [("Approved", 0), ("Restricted", 0)])
        mock_print.assert_not_called()

    def test_summary_table_show_if_empty(self):
        with patch.object(c.console, "print") as mock_print:
            print_summary_table("Test Summary", [("Approved", 0)], show_if_empty=True)
        mock_print.assert_called_once()


class TestReviewHint(unittest.TestCase):
    """Tests for the review hint."""

    def test_hint_names_project(self):
        with patch.object(c.console, "print") as mock_print:
            print_review_hint("technology.dash")
        self.assertIn("technology.dash", mock_print.call_args[0][0])

    def test_hint_without_project(self):
        with patch.object(c.console, "print") as mock_print:
            print_review_hint(None)
        self.assertIn("--project", mock_print.call_args[0][0])
