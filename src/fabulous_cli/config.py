"""
CLI Configuration

Handles configuration loading and management.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from fabulous_client.configuration import DEFAULT_BASE_URL, Configuration


# Default config locations
DEFAULT_CONFIG_PATHS = [
    Path("/etc/fabulous/config.yaml"),
    Path.home() / ".fabulous" / "config.yaml",
    Path.home() / ".fabulous" / "config.yml",
    Path("fabulous.yaml"),
]


@dataclass
class APIConfig:
    """API endpoint configuration."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    open_timeout: float = 10.0


@dataclass
class CredentialsConfig:
    """Credentials configuration."""
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass
class CLIConfig:
    """Complete CLI configuration."""
    api: APIConfig = field(default_factory=APIConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    profile: str = "default"

    @classmethod
    def from_dict(cls, data: dict, profile: str = "default") -> "CLIConfig":
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary
            profile: Profile name to use

        Returns:
            CLIConfig instance
        """
        # Get profile-specific config or use root
        if "profiles" in data and profile in data["profiles"]:
            profile_data = data["profiles"][profile] or {}
        else:
            profile_data = data

        api_data = profile_data.get("api") or {}
        api = APIConfig(
            base_url=api_data.get("base_url", DEFAULT_BASE_URL),
            timeout=float(api_data.get("timeout", 30)),
            open_timeout=float(api_data.get("open_timeout", 10)),
        )

        creds_data = profile_data.get("credentials") or {}
        credentials = CredentialsConfig(
            username=creds_data.get("username"),
            password=_expand_env(creds_data.get("password")),
        )

        return cls(api=api, credentials=credentials, profile=profile)

    @classmethod
    def from_file(cls, path: Path, profile: str = "default") -> "CLIConfig":
        """
        Load config from YAML file.

        Args:
            path: Path to config file
            profile: Profile name to use

        Returns:
            CLIConfig instance
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {}, profile)

    @classmethod
    def find_and_load(cls, profile: str = "default") -> Optional["CLIConfig"]:
        """
        Find and load config from default locations.

        Args:
            profile: Profile name to use

        Returns:
            CLIConfig instance or None if not found
        """
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path, profile)
        return None

    def to_configuration(self) -> Configuration:
        """Client configuration built from this CLI config."""
        return Configuration(
            username=self.credentials.username,
            password=self.credentials.password,
            base_url=self.api.base_url,
            timeout=self.api.timeout,
            open_timeout=self.api.open_timeout,
        )


def _expand_env(value: Optional[str]) -> Optional[str]:
    """Expand $VARS so secrets can stay in the environment."""
    if value is None:
        return None
    return os.path.expandvars(value)


def create_sample_config() -> str:
    """
    Generate sample configuration YAML.

    Returns:
        Sample config as YAML string
    """
    return """# Fabulous Client Configuration
# Default location: ~/.fabulous/config.yaml

api:
  base_url: https://api.fabulous.com
  timeout: 30        # total request timeout (seconds)
  open_timeout: 10   # connect timeout (seconds)

credentials:
  username: your-username
  password: $FABULOUS_PASSWORD

# Multiple profiles example (optional)
profiles:
  reseller:
    credentials:
      username: reseller-account
      password: $FABULOUS_RESELLER_PASSWORD
"""
