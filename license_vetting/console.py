"""Rich console utilities for license-vetting.

This module provides a shared Rich Console instance and helper functions
for CLI output, optimized for GitHub Actions and CI environments.
"""

import os
import sys
from contextlib import contextmanager
from typing import Any, Generator, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"
IS_GITLAB_CI = os.getenv("GITLAB_CI") == "true"
IS_CI = os.getenv("CI") == "true" or IS_GITHUB_ACTIONS or IS_GITLAB_CI

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
        "approved": "green",
        "restricted": "bold red",
        "needs-review": "yellow",
    }
)

# Shared console instance
# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


@contextmanager
def redirect_to_stderr(enabled: bool = True) -> Generator[None, None, None]:
    """
    Send console output and workflow commands to stderr while active.

    Used when stdout carries machine-readable output such as a CSV summary.

    Args:
        enabled: Whether to redirect; a no-op when False
    """
    previous = console.stderr
    console.stderr = previous or enabled
    try:
        yield
    finally:
        console.stderr = previous


def _emit(line: str) -> None:
    """Print a workflow command to the stream the console writes to."""
    if console.stderr:
        print(line, file=sys.stderr)
    else:
        print(line)


@contextmanager
def gha_group(title: str) -> Generator[None, None, None]:
    """
    Context manager for GitHub Actions collapsible groups.

    Args:
        title: Group title
    """
    if IS_GITHUB_ACTIONS:
        _emit(f"::group::{title}")
    try:
        yield
    finally:
        if IS_GITHUB_ACTIONS:
            _emit("::endgroup::")


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """
    Emit a warning that appears in GitHub Actions job summary.

    Args:
        message: Warning message
        title: Optional title for the warning
    """
    if IS_GITHUB_ACTIONS:
        if title:
            _emit(f"::warning title={title}::{message}")
        else:
            _emit(f"::warning::{message}")
    else:
        if title:
            console.print(f"[warning]Warning ({title}):[/warning] {message}")
        else:
            console.print(f"[warning]Warning:[/warning] {message}")


def gha_error(message: str, title: Optional[str] = None) -> None:
    """
    Emit an error that appears in GitHub Actions job summary.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if IS_GITHUB_ACTIONS:
        if title:
            _emit(f"::error title={title}::{message}")
        else:
            _emit(f"::error::{message}")
    else:
        if title:
            console.print(f"[error]Error ({title}):[/error] {message}")
        else:
            console.print(f"[error]Error:[/error] {message}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a two-column summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_review_hint(project_id: Optional[str]) -> None:
    """Explain how to get the items that need review vetted."""
    console.print()
    if project_id:
        console.print(
            f"Items that need review must be vetted before [highlight]{project_id}[/highlight] can use them. "
            "Request a review from the clearance team for each item listed above."
        )
    else:
        console.print(
            "Items that need review must be vetted before they can be used. "
            "Pass your project id via --project to include it in the review hint."
        )
