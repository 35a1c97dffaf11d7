"""Process configuration for issue-relay."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from issue_relay.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


def _get(environ: Mapping[str, str], key: str) -> str | None:
    """Read an environment value, treating blank strings as unset."""
    value = environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    """Credentials and server options, read once at startup."""

    webhook_secret: str | None = None
    github_token: str | None = None
    notion_api_key: str | None = None
    notion_database_id: str | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    # Field name -> environment variable, for every required credential
    REQUIRED_ENV: ClassVar[dict[str, str]] = {
        "webhook_secret": "GITHUB_WEBHOOK_SECRET",
        "github_token": "GITHUB_TOKEN",
        "notion_api_key": "NOTION_API_KEY",
        "notion_database_id": "NOTION_DATABASE_ID",
    }

    def __post_init__(self) -> None:
        """Validate server options."""
        if not 1 <= self.port <= 65535:
            raise ConfigurationError(f"PORT must be between 1 and 65535, got {self.port}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Settings instance. Required credentials may still be missing; call
            :meth:`validate` to enforce them.

        Raises:
            ConfigurationError: If ``PORT`` is not an integer in range.
        """
        if environ is None:
            environ = os.environ

        port_value = _get(environ, "PORT")
        try:
            port = int(port_value) if port_value else DEFAULT_PORT
        except ValueError as e:
            raise ConfigurationError(f"PORT must be an integer, got {port_value!r}") from e

        return cls(
            webhook_secret=_get(environ, "GITHUB_WEBHOOK_SECRET"),
            github_token=_get(environ, "GITHUB_TOKEN"),
            notion_api_key=_get(environ, "NOTION_API_KEY"),
            notion_database_id=_get(environ, "NOTION_DATABASE_ID"),
            host=_get(environ, "HOST") or DEFAULT_HOST,
            port=port,
            log_level=(_get(environ, "LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )

    def missing(self) -> list[str]:
        """Return the environment variables of required values that are unset."""
        return [
            env for field_name, env in self.REQUIRED_ENV.items() if not getattr(self, field_name)
        ]

    def validate(self) -> None:
        """Ensure every required credential is present.

        Raises:
            ConfigurationError: Naming all missing environment variables.
        """
        missing = self.missing()
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")
