"""
Fabulous Client Exceptions

Error hierarchy raised by the client, the response parser and the resources.
"""

from typing import Optional


class FabulousError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class FabulousConfigurationError(FabulousError):
    """Missing or invalid client configuration."""


class FabulousXMLError(FabulousError):
    """Response body could not be parsed as XML."""


class FabulousAuthenticationError(FabulousError):
    """Credentials rejected (status 300-399)."""


class FabulousRequestError(FabulousError):
    """Malformed request (status 400-499) or transport failure."""


class FabulousResponseError(FabulousError):
    """Server-side failure (status 500-599)."""


class FabulousRateLimitError(FabulousError):
    """Daily execution-time quota exhausted (status 689)."""


class FabulousTimeoutError(FabulousError):
    """Request did not complete within the configured timeouts."""
