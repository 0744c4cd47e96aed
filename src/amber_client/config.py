"""Configuration loading.

Reads a YAML file shaped like config/config.example.yaml. Values can be
overridden from the environment or a .env file:

    AMBER_API_TOKEN, AMBER_BASE_URL, AMBER_STATE
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigError
from .rest_client import DEFAULT_TIMEOUT

DEFAULT_BASE_URL = "https://api.amber.com.au/v1"


@dataclass(frozen=True)
class AppConfig:
    """Settings for one run of the client."""

    base_url: str
    auth_token: str = field(repr=False)
    token_name: str | None = None
    state: str | None = None
    timeout: float = DEFAULT_TIMEOUT


def _section(data: dict, name: str) -> dict:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return value


def load_config(config_path: Path) -> AppConfig:
    """Load settings from a YAML file, applying environment overrides."""
    load_dotenv()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    amber = _section(data, "amber")
    api_token = _section(data, "api_token")
    user = _section(data, "user")

    base_url = os.environ.get("AMBER_BASE_URL") or amber.get("base_url") or DEFAULT_BASE_URL
    auth_token = os.environ.get("AMBER_API_TOKEN") or api_token.get("psk")
    if not auth_token:
        raise ConfigError(
            "No API token configured.\n"
            "Create one at https://app.amber.com.au/developers and either set api_token.psk "
            "in the config file or export AMBER_API_TOKEN='your-token-here'"
        )

    try:
        timeout = float(amber.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigError(f"amber.timeout must be a number, got {amber.get('timeout')!r}") from None
    if timeout <= 0:
        raise ConfigError("amber.timeout must be greater than zero")

    return AppConfig(
        base_url=str(base_url),
        auth_token=str(auth_token),
        token_name=api_token.get("name"),
        state=os.environ.get("AMBER_STATE") or user.get("state"),
        timeout=timeout,
    )
