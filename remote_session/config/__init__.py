"""Configuration module for remote sessions.

- Settings: Environment variable configuration
"""

from remote_session.config.settings import Settings

__all__ = ["Settings"]
