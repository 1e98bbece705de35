"""
Client Configuration

Connection settings passed explicitly to each FabulousClient.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://api.fabulous.com"


@dataclass
class Configuration:
    """API credentials and connection settings."""
    username: Optional[str] = None
    password: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0  # Total request timeout (seconds)
    open_timeout: float = 10.0  # Connect timeout (seconds)

    def is_valid(self) -> bool:
        """Check that credentials are set."""
        return self.username is not None and self.password is not None

    @classmethod
    def from_env(cls) -> "Configuration":
        """
        Build configuration from environment variables.

        Reads FABULOUS_USERNAME, FABULOUS_PASSWORD and FABULOUS_BASE_URL.
        """
        return cls(
            username=os.environ.get("FABULOUS_USERNAME"),
            password=os.environ.get("FABULOUS_PASSWORD"),
            base_url=os.environ.get("FABULOUS_BASE_URL", DEFAULT_BASE_URL),
        )
