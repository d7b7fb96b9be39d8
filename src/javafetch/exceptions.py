"""
Custom exceptions for javafetch.

This module defines domain-specific exceptions that provide better error
categorization and more informative error messages for users and developers.
"""

from typing import List, Optional


class JavafetchError(Exception):
    """
    Base exception for all javafetch errors.

    All custom exceptions in javafetch should inherit from this class
    to allow for easy catching of all application-specific errors.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(JavafetchError):
    """
    Exception raised when configuration is invalid or missing.

    This includes:
    - Unknown distributor identifiers
    - Unsupported package types
    - Configuration file parsing errors
    """

    pass


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(JavafetchError):
    """
    Exception raised when validation of user input fails.

    Attributes:
        value: The value that failed validation.
    """

    def __init__(
        self,
        message: str,
        value: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.value = value


class InvalidVersionSpec(ValidationError):
    """Exception raised when a version string cannot be turned into a valid range."""

    pass


# =============================================================================
# Catalog Errors
# =============================================================================


class CatalogError(JavafetchError):
    """
    Base exception for vendor catalog failures.

    Attributes:
        endpoint: The catalog endpoint that was accessed.
    """

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.endpoint = endpoint


class HTTPError(CatalogError):
    """
    Exception raised when a catalog request returns a non-2xx response or
    cannot be completed at all.

    Attributes:
        status_code: The HTTP status code, or None when no response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, endpoint, details)
        self.status_code = status_code


class CatalogUnavailable(CatalogError):
    """Exception raised when a catalog produced no usable page at all."""

    pass


# =============================================================================
# Resolution Errors
# =============================================================================


class ResolutionError(JavafetchError):
    """Base exception for failures selecting a release from a catalog."""

    pass


class NoSatisfyingVersion(ResolutionError):
    """
    Exception raised when no catalog release satisfies the requested range.

    Attributes:
        spec: The normalized range that was requested.
        available_versions: Every version string seen in the catalog, in order.
    """

    def __init__(self, spec: str, available_versions: List[str]) -> None:
        self.spec = spec
        self.available_versions = list(available_versions)
        details = None
        if self.available_versions:
            details = "Available versions: " + ", ".join(self.available_versions)
        super().__init__(
            f"Could not find satisfied version for semver {spec}", details
        )


class NoBinaryForPlatform(ResolutionError):
    """Exception raised when a satisfying release has no binary for this platform."""

    pass


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(JavafetchError):
    """
    Base exception for download-related errors.

    Attributes:
        url: The URL that was being downloaded when the error occurred.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class DownloadOrExtractFailure(DownloadError):
    """Exception raised when a binary archive cannot be downloaded, extracted or cached."""

    pass
