"""Error types raised by the SSH operator.

Every failure of an invocation surfaces as one of these. The underlying
exception, when there is one, is kept on ``cause`` and chained as
``__cause__`` by the raising code.
"""


class SSHOperatorError(Exception):
    """Base class for all operator failures."""

    def __init__(self, message: str, cause: BaseException | None = None):
        """Initialize operator error.

        Args:
            message: Human readable description
            cause: Underlying exception, if any
        """
        self.cause = cause
        super().__init__(message)


class ConfigurationError(SSHOperatorError):
    """Required parameter absent or an unsupported combination requested."""


class MissingCredential(ConfigurationError):
    """Secret required by the selected authentication mode is absent."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"{name} not set")


class UnsupportedFeature(ConfigurationError):
    """Requested feature is recognized but not implemented."""


class RetryExhausted(SSHOperatorError):
    """Connection failed on every allowed attempt."""

    def __init__(self, attempts: int, cause: BaseException):
        """Initialize retry exhausted error.

        Args:
            attempts: Number of attempts made
            cause: Exception raised by the last attempt
        """
        self.attempts = attempts
        super().__init__(
            f"Giving up after {attempts} attempt(s): {cause}",
            cause=cause,
        )


class AuthenticationFailed(SSHOperatorError):
    """Remote host rejected the credentials."""


class ExecutionFailed(SSHOperatorError):
    """I/O failure while running the command or reading its output."""


class CommandTimedOut(ExecutionFailed):
    """Command did not finish within the configured timeout."""

    def __init__(self, timeout: int, cause: BaseException | None = None):
        self.timeout = timeout
        super().__init__(
            f"Command did not complete within {timeout}s",
            cause=cause,
        )


class CommandFailed(SSHOperatorError):
    """Remote command ran to completion with a non-zero exit status."""

    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(f"Command failed with code {exit_code}")
