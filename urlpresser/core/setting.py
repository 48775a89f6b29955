"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
Values come from environment variables or a .env file; command-line flags
parsed in urlpresser.__main__ are passed as init arguments and override both.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Empty environment variables count as unset and fall back to the defaults
- Persistence is on by default and disabled with `-f ""` (an empty init value)
- No module-level instance: the entry point builds Settings once and hands it
  to create_app()
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "parse_server_address"]

DEFAULT_HOST = "0.0.0.0"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )

    # HTTP Configuration
    SERVER_ADDRESS: str = Field(
        default=":8080",
        description="HTTP listen address as host:port (empty host listens on all interfaces)"
    )
    BASE_URL: str = Field(
        default="http://localhost:8080/",
        description="Prefix prepended to short keys to build shareable links"
    )

    # Storage Configuration
    # An empty init value (the -f "" flag) disables persistence (pure in-memory mode)
    FILE_STORAGE_PATH: Optional[str] = Field(
        default="/tmp/short-url-db.json",
        description="Path of the JSON snapshot file; an empty flag value disables persistence"
    )
    FAIL_ON_PERSIST_ERROR: bool = Field(
        default=True,
        description="Fail the shorten request when the snapshot cannot be written"
    )

    # Short Code Configuration
    SHORT_CODE_LENGTH: int = Field(
        default=6,
        ge=6,
        le=8,
        description="Fixed length for all generated short codes"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("BASE_URL")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        if not value.endswith("/"):
            value += "/"
        return value

    @field_validator("FILE_STORAGE_PATH")
    @classmethod
    def _empty_path_disables_storage(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @property
    def host(self) -> str:
        return parse_server_address(self.SERVER_ADDRESS)[0]

    @property
    def port(self) -> int:
        return parse_server_address(self.SERVER_ADDRESS)[1]


def parse_server_address(address: str) -> tuple[str, int]:
    """
    Split a listen address into host and port.

    Accepts "host:port" and ":port". An empty host means all interfaces.

    Raises:
        ValueError: If the port is missing or not a number
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid server address: '{address}' (expected host:port)")
    return host or DEFAULT_HOST, int(port)
