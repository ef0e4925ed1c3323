"""SSH host key verification policy.

The operator accepts any host key unless a known_hosts file is configured.
"""

import logging
import os
from pathlib import Path

from ssh_operator.errors import ConfigurationError

logger = logging.getLogger(__name__)


class HostKeyPolicy:
    """Decides what asyncssh receives as ``known_hosts``."""

    def __init__(self, known_hosts_path: str | None = None):
        """Initialize host key policy.

        Args:
            known_hosts_path: Path to a known_hosts file, or None to accept
                any host key

        Raises:
            ConfigurationError: If a path is given and the file is missing
        """
        self._known_hosts = self._resolve_known_hosts(known_hosts_path)

    def _resolve_known_hosts(self, value: str | None) -> str | None:
        """Resolve known_hosts path.

        Returns:
            Path to known_hosts file or None to disable verification

        Raises:
            ConfigurationError: If the configured file does not exist
        """
        if not value or value.lower() == "none":
            return None

        path = Path(os.path.expanduser(value))
        if not path.is_file():
            raise ConfigurationError(
                f"Host key verification requested but known_hosts file "
                f"not found: {path}\n\n"
                f"To fix this:\n"
                f"1. Add host keys: ssh-keyscan <hostname> >> {path}\n"
                f"2. Or remove the known_hosts parameter to accept any host key"
            )
        return str(path)

    @property
    def known_hosts(self) -> str | None:
        """Value to pass as asyncssh ``known_hosts`` (None disables checks)."""
        return self._known_hosts

    def is_enabled(self) -> bool:
        """Check if host key verification is enabled."""
        return self._known_hosts is not None

    def log_policy(self, host: str) -> None:
        """Log the policy in effect for a connection to ``host``."""
        if not self.is_enabled():
            logger.warning(
                "SSH host key verification DISABLED for %s - any host key is "
                "accepted, vulnerable to MITM attacks. Set known_hosts to enable.",
                host,
            )
        else:
            logger.info(
                "SSH host key verification enabled for %s (known_hosts=%s)",
                host,
                self._known_hosts,
            )
