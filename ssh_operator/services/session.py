"""Run one command on one host over a fresh SSH connection.

Lifecycle per call: connect (retried) and authenticate, open one exec
channel, wait for the command within its timeout, collect output and exit
status, then close the channel and the connection. The channel is always
closed before the connection, and both are closed on every path. Close
acknowledgements are awaited for at most ``close_timeout`` seconds, after
which an unacknowledged connection is aborted.

Security caveat: unless a known_hosts file is configured, any host key is
accepted. This gives no protection against man-in-the-middle attacks.
"""

import asyncio
import logging
from typing import Any

import asyncssh

from ssh_operator.config import HostKeyPolicy
from ssh_operator.errors import (
    AuthenticationFailed,
    CommandTimedOut,
    ConfigurationError,
    ExecutionFailed,
)
from ssh_operator.models import (
    CommandOutcome,
    Credentials,
    ExecutionRequest,
    PasswordCredentials,
    RetryPolicy,
)
from ssh_operator.services.retry import RetryExecutor

logger = logging.getLogger(__name__)

# Seconds to wait for the peer to acknowledge a channel or connection close
CLOSE_TIMEOUT = 5.0


def is_retryable_connect_error(exc: BaseException) -> bool:
    """Every connect failure is retried except rejected credentials."""
    return not isinstance(exc, asyncssh.PermissionDenied)


class SessionRunner:
    """Executes a single remote command per call."""

    def __init__(
        self,
        retry_policy: RetryPolicy,
        close_timeout: float = CLOSE_TIMEOUT,
    ) -> None:
        self.retry_policy = retry_policy
        self.close_timeout = close_timeout

    async def execute(
        self,
        request: ExecutionRequest,
        credentials: Credentials,
    ) -> CommandOutcome:
        """Run ``request.command`` on ``request.host``.

        Returns:
            Exit status and captured output

        Raises:
            ConfigurationError: If key material or known_hosts is unusable
            RetryExhausted: If every connection attempt failed
            AuthenticationFailed: If the host rejected the credentials
            CommandTimedOut: If the command outlived ``command_timeout``
            ExecutionFailed: On I/O failure while running the command
        """
        host_keys = HostKeyPolicy(request.known_hosts)
        options = self._client_options(credentials, host_keys)

        conn = await self._connect(request, options, host_keys)
        try:
            return await self._run_command(conn, request)
        finally:
            logger.info("Disconnecting from %s:%d", request.host, request.port)
            conn.close()
            if not await self._wait_closed(conn, "connection"):
                conn.abort()

    def _client_options(
        self,
        credentials: Credentials,
        host_keys: HostKeyPolicy,
    ) -> dict[str, Any]:
        """Translate credentials into asyncssh connect options."""
        options: dict[str, Any] = {
            "username": credentials.user,
            "known_hosts": host_keys.known_hosts,
            "agent_path": None,
            "preferred_auth": credentials.method,
        }
        if isinstance(credentials, PasswordCredentials):
            options["password"] = credentials.password
            options["client_keys"] = None
        else:
            options["client_keys"] = [
                _load_key_pair(credentials.private_key, credentials.public_key)
            ]
        return options

    async def _connect(
        self,
        request: ExecutionRequest,
        options: dict[str, Any],
        host_keys: HostKeyPolicy,
    ) -> asyncssh.SSHClientConnection:
        """Open and authenticate the transport, retrying connect failures."""
        logger.info("Connecting %s:%d", request.host, request.port)
        host_keys.log_policy(request.host)

        async def attempt() -> asyncssh.SSHClientConnection:
            return await asyncssh.connect(request.host, port=request.port, **options)

        executor = RetryExecutor(
            self.retry_policy,
            retry_if=is_retryable_connect_error,
        )
        try:
            conn = await executor.run(attempt)
        except asyncssh.PermissionDenied as e:
            logger.error("Authentication failed for %s: %s", request.target, e)
            raise AuthenticationFailed(
                f"Authentication failed for {request.target}: {e}",
                cause=e,
            ) from e

        logger.info(
            "Authenticated user %s with %s",
            request.user,
            options["preferred_auth"],
        )
        return conn

    async def _run_command(
        self,
        conn: asyncssh.SSHClientConnection,
        request: ExecutionRequest,
    ) -> CommandOutcome:
        """Run the command on one exec channel and close it afterwards."""
        logger.info("Execute command: %s", request.command)
        try:
            process = await conn.create_process(request.command, encoding=None)
        except (asyncssh.Error, OSError) as e:
            raise ExecutionFailed(f"Failed to start command: {e}", cause=e) from e

        try:
            completed = await process.wait(
                check=False,
                timeout=request.command_timeout,
            )
        except (asyncssh.TimeoutError, asyncio.TimeoutError) as e:
            logger.error(
                "Command timed out after %ds on %s",
                request.command_timeout,
                request.host,
            )
            raise CommandTimedOut(request.command_timeout, cause=e) from e
        except (asyncssh.Error, OSError) as e:
            raise ExecutionFailed(f"Command execution failed: {e}", cause=e) from e
        finally:
            process.close()
            await self._wait_closed(process, "channel")

        if completed.exit_status is None:
            signal = completed.exit_signal[0] if completed.exit_signal else None
            raise ExecutionFailed(
                f"Command ended without exit status (signal={signal})"
            )

        return CommandOutcome(
            exit_status=completed.exit_status,
            stdout=_as_bytes(completed.stdout),
            stderr=_as_bytes(completed.stderr),
        )

    async def _wait_closed(self, resource: Any, name: str) -> bool:
        """Wait up to ``close_timeout`` for a close to be acknowledged.

        Returns:
            False if the peer did not acknowledge in time
        """
        try:
            await asyncio.wait_for(resource.wait_closed(), self.close_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "No close acknowledgement for %s after %.1fs",
                name,
                self.close_timeout,
            )
            return False
        return True


def _load_key_pair(private_data: str, public_data: str) -> asyncssh.SSHKey:
    """Import an OpenSSH key pair and check the halves belong together.

    Raises:
        ConfigurationError: If either key cannot be parsed or they differ
    """
    try:
        private_key = asyncssh.import_private_key(private_data)
        public_key = asyncssh.import_public_key(public_data)
    except asyncssh.KeyImportError as e:
        raise ConfigurationError(f"Invalid SSH key material: {e}", cause=e) from e

    if private_key.public_data != public_key.public_data:
        raise ConfigurationError("public_key does not match private_key")
    return private_key


def _as_bytes(data: bytes | str | None) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    return data
