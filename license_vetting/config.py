"""Run configuration for license-vetting."""

import re
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urlparse

from ._lookup import (
    CLEARLYDEFINED_API_BASE,
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MAX_WORKERS,
    FOUNDATION_API_URL,
)
from ._readers import ReaderKind
from .exceptions import ConfigurationError, ValidationError
from .logging_config import logger

LOCALHOST_PATTERNS = ["127.0.0.1", "localhost", "0.0.0.0"]
DEFAULT_TIMEOUT = 300.0  # seconds, for the whole lookup of one input
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_BACKOFF_FACTOR = 0.5

# Project ids are dotted, lower-case paths such as "technology.dash"
_PROJECT_ID_PATTERN = re.compile(r"^[a-z][a-z0-9\-]*(?:\.[a-z0-9][a-z0-9\-_]*)+$")


def validate_project_id(project_id: str) -> str:
    """
    Validate a project identifier.

    Raises:
        ValidationError: If the id is not a dotted lower-case project path
    """
    if not _PROJECT_ID_PATTERN.match(project_id or ""):
        raise ValidationError(
            f'"{project_id}" is not a valid project id; expected a dotted id such as "technology.dash"'
        )
    return project_id


def _validate_url(name: str, url: str) -> str:
    """Validate an http(s) URL and strip any trailing slash."""
    parsed = urlparse(url)

    if not parsed.scheme or parsed.scheme not in ("http", "https"):
        raise ConfigurationError(f"{name} must start with http:// or https://")
    if not parsed.netloc:
        raise ConfigurationError(f"{name} must include a valid hostname")

    # Security warning for HTTP on non-localhost
    if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
        logger.warning(f"Using HTTP (not HTTPS) for {name} - consider using HTTPS")

    return url.rstrip("/")


@dataclass
class Settings:
    """Configuration settings for one license vetting run."""

    files: List[str] = field(default_factory=lambda: ["-"])
    reader_kind: Optional[ReaderKind] = None
    summary_file: Optional[str] = None
    excluded_sources_file: Optional[str] = None
    approved_licenses: Optional[str] = None
    foundation_api_url: str = FOUNDATION_API_URL
    clearlydefined_api_base: str = CLEARLYDEFINED_API_BASE
    batch_size: int = DEFAULT_BATCH_SIZE
    max_workers: int = DEFAULT_MAX_WORKERS
    confidence_threshold: int = DEFAULT_CONFIDENCE_THRESHOLD
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    timeout: float = DEFAULT_TIMEOUT
    project_id: Optional[str] = None
    log_level: str = "INFO"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.files:
            raise ConfigurationError("At least one input file (or '-' for standard input) is required")
        if self.files.count("-") > 1:
            raise ConfigurationError("Standard input ('-') can only be read once")
        if self.batch_size < 1:
            raise ConfigurationError("Batch size must be a positive number")
        if self.max_workers < 1:
            raise ConfigurationError("Worker count must be a positive number")
        if self.retry_attempts < 1:
            raise ConfigurationError("Retry attempts must be a positive number")
        if self.backoff_factor < 0:
            raise ConfigurationError("Backoff factor cannot be negative")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be a positive number of seconds")
        if not 0 <= self.confidence_threshold <= 100:
            raise ConfigurationError("Confidence threshold must be between 0 and 100")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

        self.foundation_api_url = _validate_url("Foundation API URL", self.foundation_api_url)
        self.clearlydefined_api_base = _validate_url("ClearlyDefined API URL", self.clearlydefined_api_base)
