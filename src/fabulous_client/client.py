"""
Fabulous Client

HTTP client for the Fabulous registrar XML API.
"""

import logging
import re
from typing import Any, Dict, Optional

import httpx

from fabulous_client.configuration import Configuration
from fabulous_client.exceptions import (
    FabulousAuthenticationError,
    FabulousConfigurationError,
    FabulousError,
    FabulousRateLimitError,
    FabulousRequestError,
    FabulousResponseError,
    FabulousTimeoutError,
)
from fabulous_client.models import ParsedResponse
from fabulous_client.resources.dns import DNSResource
from fabulous_client.resources.domain import DomainResource
from fabulous_client.response import ResponseParser

logger = logging.getLogger("fabulous.client")

RATE_LIMIT_CODE = 689
RATE_LIMIT_MESSAGE = "Execution time exhausted (300 seconds per 24 hours limit reached)"

_TIMEOUT_TEXT = re.compile(r"timeout|timed out|expired", re.IGNORECASE)


class FabulousClient:
    """
    Client for the Fabulous registrar API.

    Every action is a GET to ``<base_url>/<action>`` with the credentials and
    action parameters in the query string. The XML body is parsed into a
    ParsedResponse and non-success status codes are raised as exceptions.

    Example:
        config = Configuration(username="reseller", password="secret")

        with FabulousClient(config) as client:
            if client.domains.check("example.com"):
                client.domains.register("example.com", years=2)

            for record in client.dns.a_records("example.com"):
                print(record.hostname, record.ip_address)
    """

    def __init__(
        self,
        configuration: Configuration,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            configuration: Credentials and connection settings
            transport: Optional httpx transport (used by tests)

        Raises:
            FabulousConfigurationError: If username or password is missing
        """
        if configuration is None or not configuration.is_valid():
            raise FabulousConfigurationError("Username and password are required")

        self.configuration = configuration
        self._http = httpx.Client(
            base_url=configuration.base_url,
            timeout=httpx.Timeout(configuration.timeout, connect=configuration.open_timeout),
            transport=transport,
        )

        self._domains: Optional[DomainResource] = None
        self._dns: Optional[DNSResource] = None

    @property
    def domains(self) -> DomainResource:
        """Domain operations."""
        if self._domains is None:
            self._domains = DomainResource(self)
        return self._domains

    @property
    def dns(self) -> DNSResource:
        """DNS record operations."""
        if self._dns is None:
            self._dns = DNSResource(self)
        return self._dns

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def _build_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Add credentials; the action itself is part of the URL path."""
        merged = {
            "username": self.configuration.username,
            "password": self.configuration.password,
        }
        merged.update(params)
        return merged

    def request(self, action: str, params: Optional[Dict[str, Any]] = None) -> ParsedResponse:
        """
        Perform one API action.

        Args:
            action: Remote action name (e.g. "listDomains")
            params: Action parameters

        Returns:
            Parsed response (always successful)

        Raises:
            FabulousTimeoutError: If the request timed out
            FabulousRequestError: On transport failure or status 400-499
            FabulousAuthenticationError: On status 300-399
            FabulousResponseError: On status 500-599
            FabulousRateLimitError: On status 689
            FabulousXMLError: If the body is not valid XML
            FabulousError: On any other non-success status
        """
        query = self._build_params(params or {})
        url = f"/{action}"

        logger.debug(f"Request {action}: {_mask(query)}")

        try:
            http_response = self._http.get(url, params=query)
        except httpx.TimeoutException as e:
            raise FabulousTimeoutError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            if _TIMEOUT_TEXT.search(str(e)):
                raise FabulousTimeoutError(f"Request timed out: {e}") from e
            raise FabulousRequestError(f"Request failed: {e}") from e

        logger.debug(f"HTTP status {http_response.status_code} for {action}")
        logger.debug(f"Response body:\n{http_response.text}")

        response = ResponseParser.parse(http_response.content)
        return self._check_response(response)

    def _check_response(self, response: ParsedResponse) -> ParsedResponse:
        """
        Raise the exception matching a non-success status code.

        Args:
            response: Parsed response

        Returns:
            Response if successful
        """
        if response.success:
            return response

        code = response.status_code
        message = response.status_message

        if code is not None:
            if 300 <= code <= 399:
                raise FabulousAuthenticationError(message or "Authentication failed", code)
            if 400 <= code <= 499:
                raise FabulousRequestError(message or "Request error", code)
            if 500 <= code <= 599:
                raise FabulousResponseError(message or "Server error", code)
            if code == RATE_LIMIT_CODE:
                raise FabulousRateLimitError(RATE_LIMIT_MESSAGE, code)

        raise FabulousError(f"Unknown error: {message} (code: {code})", code)


def _mask(params: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of params safe for logging."""
    return {k: ("***" if k == "password" else v) for k, v in params.items()}
