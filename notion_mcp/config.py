"""
Process configuration.

Settings are read once from the environment (and an optional .env file)
at startup and never change afterwards.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .base import ConfigurationError

DEFAULT_PORT = 3000
DEFAULT_NOTION_VERSION = "2022-06-28"
SERVICE_NAME = "Notion MCP Server"


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _parse_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {value!r}")
    return level


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""
    notion_api_key: str = ""
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    notion_version: str = DEFAULT_NOTION_VERSION
    request_timeout: float = 30.0
    service_name: str = SERVICE_NAME
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        dotenv: bool = True,
    ) -> "Settings":
        """
        Build settings from environment variables.

        NOTION_API_TOKEN is accepted as a fallback for NOTION_API_KEY.
        A missing key is not an error here; see require_credentials().
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        api_key = environ.get("NOTION_API_KEY") or environ.get("NOTION_API_TOKEN", "")

        return cls(
            notion_api_key=api_key.strip(),
            port=_parse_int(environ.get("PORT", str(DEFAULT_PORT)), "PORT"),
            host=environ.get("HOST", "0.0.0.0"),
            notion_version=environ.get("NOTION_VERSION", DEFAULT_NOTION_VERSION),
            request_timeout=_parse_float(environ.get("NOTION_TIMEOUT", "30"), "NOTION_TIMEOUT"),
            log_level=_parse_log_level(environ.get("LOG_LEVEL", "INFO")),
        )

    def require_credentials(self) -> None:
        """Fail fast when no Notion credential is configured."""
        if not self.notion_api_key:
            raise ConfigurationError(
                "NOTION_API_KEY environment variable is not set"
            )
