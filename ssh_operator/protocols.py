"""Protocol interfaces for the collaborators the operator consumes.

The workflow engine hosting the operator supplies secrets and receives a
runnable task. Any object with the right methods works, which keeps the
core independent of a particular engine.

Usage Example:

    from ssh_operator.protocols import SecretStore

    class VaultSecrets:
        def get_secrets(self, namespace):
            return VaultNamespace(namespace)

    context = OperatorContext(config=params, secrets=VaultSecrets())
"""

from typing import Protocol, runtime_checkable

from ssh_operator.models import TaskResult


@runtime_checkable
class SecretProvider(Protocol):
    """Secrets of a single namespace."""

    def get_secret(self, name: str) -> str:
        """Get a secret value.

        Raises:
            MissingCredential: If the secret is not set
        """
        ...

    def get_secret_optional(self, name: str) -> str | None:
        """Get a secret value, or None if not set."""
        ...


@runtime_checkable
class SecretStore(Protocol):
    """Access to namespaced secret providers."""

    def get_secrets(self, namespace: str) -> SecretProvider:
        """Get the provider scoped to ``namespace``."""
        ...


@runtime_checkable
class Operator(Protocol):
    """A runnable task bound to one invocation."""

    def run_task(self) -> TaskResult:
        """Run the task.

        Returns:
            Empty success result

        Raises:
            SSHOperatorError: On any failure
        """
        ...
