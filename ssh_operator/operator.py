"""SSH operator: run one shell command on a remote host as a workflow task.

The factory is registered with the workflow engine under the ``ssh`` type
and creates one operator per task invocation.

Recognized parameters (an ``ssh:`` section overrides top-level keys):

    host                required
    port                22
    user                required
    _command            required, the shell command
    command_timeout     60 (seconds)
    initial_retry_wait  500 (ms)
    max_retry_wait      2000 (ms)
    max_retry_limit     3 (retries after the first connection attempt)
    stdout_log          true
    stderr_log          false
    password_auth       false
    password_override   optional, names the secret holding the password
    known_hosts         optional, enables host key verification

Secrets are read from the ``ssh`` namespace: ``password``, or
``public_key`` and ``private_key``.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ssh_operator.config import TaskParams
from ssh_operator.models import ExecutionRequest, RetryPolicy, TaskResult
from ssh_operator.models.request import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_INITIAL_RETRY_WAIT,
    DEFAULT_MAX_RETRY_LIMIT,
    DEFAULT_MAX_RETRY_WAIT,
    DEFAULT_PORT,
)
from ssh_operator.protocols import SecretStore
from ssh_operator.services import SessionRunner, report_outcome, resolve_credentials

logger = logging.getLogger(__name__)

OPERATOR_TYPE = "ssh"

SessionRunnerFactory = Callable[[RetryPolicy], SessionRunner]


@dataclass(frozen=True)
class OperatorContext:
    """Everything one task invocation receives from the workflow engine."""

    config: TaskParams
    secrets: SecretStore


def build_request(params: TaskParams) -> ExecutionRequest:
    """Build the execution request from merged task parameters."""
    return ExecutionRequest(
        host=params.get("host", str),
        port=params.get("port", int, DEFAULT_PORT),
        command=params.get("_command", str),
        user=params.get("user", str),
        command_timeout=params.get("command_timeout", int, DEFAULT_COMMAND_TIMEOUT),
        stdout_log=params.get("stdout_log", bool, True),
        stderr_log=params.get("stderr_log", bool, False),
        known_hosts=params.get_optional("known_hosts", str),
    )


def build_retry_policy(params: TaskParams) -> RetryPolicy:
    """Build the connection retry policy from merged task parameters."""
    retry_limit = params.get("max_retry_limit", int, DEFAULT_MAX_RETRY_LIMIT)
    return RetryPolicy(
        initial_wait_ms=params.get("initial_retry_wait", int, DEFAULT_INITIAL_RETRY_WAIT),
        max_wait_ms=params.get("max_retry_wait", int, DEFAULT_MAX_RETRY_WAIT),
        max_attempts=retry_limit + 1,
    )


class SSHOperator:
    """Runs the task for one invocation."""

    def __init__(
        self,
        context: OperatorContext,
        session_runner_factory: SessionRunnerFactory = SessionRunner,
    ) -> None:
        self.context = context
        self._session_runner_factory = session_runner_factory

    def run_task(self) -> TaskResult:
        """Connect, run the command and classify its exit status.

        Blocks until the command has finished and the connection is closed.

        Returns:
            Empty success result when the command exits with status 0

        Raises:
            SSHOperatorError: The first failure, after network cleanup
        """
        params = self.context.config.merged_with_nested(OPERATOR_TYPE)
        request = build_request(params)
        policy = build_retry_policy(params)

        # Resolved before connecting so configuration errors never hit the network
        credentials = resolve_credentials(
            self.context.secrets.get_secrets(OPERATOR_TYPE),
            params,
        )

        runner = self._session_runner_factory(policy)
        outcome = asyncio.run(runner.execute(request, credentials))
        return report_outcome(outcome, request.stdout_log, request.stderr_log)


class SSHOperatorFactory:
    """Creates an :class:`SSHOperator` per task invocation."""

    type = OPERATOR_TYPE

    def __init__(self, session_runner_factory: SessionRunnerFactory = SessionRunner) -> None:
        self._session_runner_factory = session_runner_factory

    def get_type(self) -> str:
        return self.type

    def new_operator(self, context: OperatorContext) -> SSHOperator:
        return SSHOperator(context, self._session_runner_factory)
