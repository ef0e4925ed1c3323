"""Services for the SSH operator."""

from ssh_operator.services.credentials import resolve_credentials
from ssh_operator.services.reporter import output_lines, report_outcome
from ssh_operator.services.retry import RetryExecutor
from ssh_operator.services.secrets import (
    EnvSecretProvider,
    EnvSecretStore,
    MappingSecretProvider,
    StaticSecretStore,
)
from ssh_operator.services.session import SessionRunner, is_retryable_connect_error

__all__ = [
    "EnvSecretProvider",
    "EnvSecretStore",
    "MappingSecretProvider",
    "RetryExecutor",
    "SessionRunner",
    "StaticSecretStore",
    "is_retryable_connect_error",
    "output_lines",
    "report_outcome",
    "resolve_credentials",
]
