"""CLI module for license-vetting.

This module provides the command-line interface. It supports both CLI
arguments and environment variables for configuration.
"""

from .main import build_checker, cli, main, run

__all__ = [
    "cli",
    "main",
    "run",
    "build_checker",
]
