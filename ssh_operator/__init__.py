"""SSH operator: run a shell command on a remote host as a workflow task."""

from ssh_operator.config import TaskParams
from ssh_operator.errors import (
    AuthenticationFailed,
    CommandFailed,
    CommandTimedOut,
    ConfigurationError,
    ExecutionFailed,
    MissingCredential,
    RetryExhausted,
    SSHOperatorError,
    UnsupportedFeature,
)
from ssh_operator.models import TaskResult
from ssh_operator.operator import OperatorContext, SSHOperator, SSHOperatorFactory

__version__ = "0.1.0"

__all__ = [
    "AuthenticationFailed",
    "CommandFailed",
    "CommandTimedOut",
    "ConfigurationError",
    "ExecutionFailed",
    "MissingCredential",
    "OperatorContext",
    "RetryExhausted",
    "SSHOperator",
    "SSHOperatorError",
    "SSHOperatorFactory",
    "TaskParams",
    "TaskResult",
    "UnsupportedFeature",
]
