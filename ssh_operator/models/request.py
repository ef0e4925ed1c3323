"""Per-invocation request and retry policy models."""

from dataclasses import dataclass

from ssh_operator.errors import ConfigurationError

DEFAULT_PORT = 22
DEFAULT_COMMAND_TIMEOUT = 60
DEFAULT_INITIAL_RETRY_WAIT = 500
DEFAULT_MAX_RETRY_WAIT = 2000
DEFAULT_MAX_RETRY_LIMIT = 3


@dataclass(frozen=True)
class ExecutionRequest:
    """One remote command to run on one host."""

    host: str
    command: str
    user: str
    port: int = DEFAULT_PORT
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    stdout_log: bool = True
    stderr_log: bool = False
    known_hosts: str | None = None

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigurationError("host must not be empty")
        if not self.command:
            raise ConfigurationError("_command must not be empty")
        if not self.user:
            raise ConfigurationError("user must not be empty")
        if not 1 <= self.port <= 65535:
            raise ConfigurationError(f"port must be in 1..65535, got {self.port}")
        if self.command_timeout <= 0:
            raise ConfigurationError(
                f"command_timeout must be > 0, got {self.command_timeout}"
            )

    @property
    def target(self) -> str:
        """Return ``user@host:port`` for log messages."""
        return f"{self.user}@{self.host}:{self.port}"


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with capped exponential backoff (milliseconds).

    ``max_attempts`` counts the first attempt, so it is one more than the
    ``max_retry_limit`` task parameter.
    """

    initial_wait_ms: int = DEFAULT_INITIAL_RETRY_WAIT
    max_wait_ms: int = DEFAULT_MAX_RETRY_WAIT
    max_attempts: int = DEFAULT_MAX_RETRY_LIMIT + 1

    def __post_init__(self) -> None:
        if self.initial_wait_ms < 0:
            raise ConfigurationError(
                f"initial_retry_wait must be >= 0, got {self.initial_wait_ms}"
            )
        if self.initial_wait_ms > self.max_wait_ms:
            raise ConfigurationError(
                f"initial_retry_wait ({self.initial_wait_ms}) must not exceed "
                f"max_retry_wait ({self.max_wait_ms})"
            )
        if self.max_attempts < 1:
            raise ConfigurationError(
                f"max_retry_limit must be >= 0, got {self.max_attempts - 1}"
            )

    def wait_for(self, retry_count: int) -> int:
        """Wait in milliseconds before the given retry (1-based).

        Doubles from ``initial_wait_ms`` and is capped at ``max_wait_ms``.
        """
        if retry_count < 1:
            raise ValueError(f"retry_count must be >= 1, got {retry_count}")
        return min(self.initial_wait_ms * 2 ** (retry_count - 1), self.max_wait_ms)
