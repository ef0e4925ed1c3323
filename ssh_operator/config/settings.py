"""Process settings from environment variables.

Only the standalone entry point reads these; an embedding workflow engine
passes task parameters and secrets directly.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    # Secrets
    secret_prefix: str = field(default="SSH_SECRET_")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            log_level=cls._get_log_level("SSH_OPERATOR_LOG_LEVEL", "INFO"),
            log_colors=cls._get_bool("SSH_OPERATOR_LOG_COLORS", True),
            secret_prefix=os.getenv("SSH_OPERATOR_SECRET_PREFIX", "SSH_SECRET_"),
        )

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

    @staticmethod
    def _get_log_level(key: str, default: str) -> str:
        value = os.getenv(key)
        if value is None:
            return default
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            logger.warning("Invalid log level for %s: %s, using default %s", key, value, default)
            return default
        return level
