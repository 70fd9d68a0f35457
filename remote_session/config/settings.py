"""Application settings from environment variables.

Centralized environment variable parsing and validation. The session core
never reads the environment; only callers such as the CLI go through here.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from remote_session.services import RemoteSession

logger = logging.getLogger(__name__)

DEFAULT_LOG_MAX_BYTES = 50 * 1024 * 1024


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Connection
    host: str = field(default="")
    port: int = field(default=22)
    username: str = field(default="")
    password: str = field(default="", repr=False)
    known_hosts: str | None = field(default=None)
    timeout: float | None = field(default=None)

    # Logging
    log_level: str = field(default="INFO")
    log_dir: str = field(default="./logs")
    log_max_bytes: int = field(default=DEFAULT_LOG_MAX_BYTES)
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from REMOTE_SESSION_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            host=os.getenv("REMOTE_SESSION_HOST", ""),
            port=cls._get_int("REMOTE_SESSION_PORT", 22),
            username=os.getenv("REMOTE_SESSION_USER", ""),
            password=os.getenv("REMOTE_SESSION_PASSWORD", ""),
            known_hosts=os.getenv("REMOTE_SESSION_KNOWN_HOSTS") or None,
            timeout=cls._get_float("REMOTE_SESSION_TIMEOUT", None),
            log_level=os.getenv("REMOTE_SESSION_LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv("REMOTE_SESSION_LOG_DIR", "./logs"),
            log_max_bytes=cls._get_int("REMOTE_SESSION_LOG_MAX_BYTES", DEFAULT_LOG_MAX_BYTES),
            log_colors=cls._get_bool("REMOTE_SESSION_LOG_COLORS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float | None) -> float | None:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    def create_session(self, **overrides: Any) -> "RemoteSession":
        """Build a RemoteSession from these settings.

        Args:
            **overrides: Keyword arguments passed to RemoteSession instead
                of the corresponding settings

        Returns:
            Disconnected RemoteSession
        """
        from remote_session.services import RemoteSession

        kwargs: dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": self.password,
            "known_hosts": self.known_hosts,
            "default_timeout": self.timeout,
        }
        kwargs.update(overrides)
        return RemoteSession(**kwargs)
