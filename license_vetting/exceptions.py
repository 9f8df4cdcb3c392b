"""Custom exceptions for license-vetting."""


class LicenseVettingError(Exception):
    """Base exception for all license-vetting operations."""


class ConfigurationError(LicenseVettingError):
    """Raised when configuration validation fails."""


class FileProcessingError(LicenseVettingError):
    """Raised when an input file is missing or cannot be read."""


class ContentIdParseError(LicenseVettingError):
    """Raised by id parsers when a coordinate cannot be understood.

    Readers catch this and degrade the entry to an InvalidContentId.
    """


class TransportError(LicenseVettingError):
    """Raised when a remote license data source cannot be reached or answers badly."""


class ValidationError(LicenseVettingError):
    """Raised when a project identifier fails validation."""
