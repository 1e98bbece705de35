"""
Fabulous Client

Python client for the Fabulous registrar XML API.
"""

from fabulous_client.client import FabulousClient
from fabulous_client.configuration import Configuration
from fabulous_client.exceptions import (
    FabulousAuthenticationError,
    FabulousConfigurationError,
    FabulousError,
    FabulousRateLimitError,
    FabulousRequestError,
    FabulousResponseError,
    FabulousTimeoutError,
    FabulousXMLError,
)
from fabulous_client.models import (
    AAAARecord,
    ARecord,
    CNAMERecord,
    DNSRecord,
    DomainInfo,
    DomainSummary,
    MXRecord,
    PaginationInfo,
    ParsedResponse,
    ResponseData,
    TXTRecord,
)
from fabulous_client.response import ResponseParser, parse_response

__version__ = "1.0.0"

__all__ = [
    "FabulousClient",
    "Configuration",
    "ResponseParser",
    "parse_response",
    # Exceptions
    "FabulousError",
    "FabulousConfigurationError",
    "FabulousXMLError",
    "FabulousAuthenticationError",
    "FabulousRequestError",
    "FabulousResponseError",
    "FabulousRateLimitError",
    "FabulousTimeoutError",
    # Models
    "ParsedResponse",
    "ResponseData",
    "PaginationInfo",
    "DomainSummary",
    "DomainInfo",
    "DNSRecord",
    "MXRecord",
    "CNAMERecord",
    "ARecord",
    "AAAARecord",
    "TXTRecord",
]
