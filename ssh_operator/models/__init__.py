"""Data models for the SSH operator."""

from ssh_operator.models.command import CommandOutcome, TaskResult
from ssh_operator.models.credentials import (
    Credentials,
    PasswordCredentials,
    PublicKeyCredentials,
)
from ssh_operator.models.request import ExecutionRequest, RetryPolicy

__all__ = [
    "CommandOutcome",
    "Credentials",
    "ExecutionRequest",
    "PasswordCredentials",
    "PublicKeyCredentials",
    "RetryPolicy",
    "TaskResult",
]
