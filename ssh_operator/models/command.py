"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandOutcome:
    """Exit status and captured output of a remote command."""

    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class TaskResult:
    """Result handed back to the workflow engine.

    Success carries no payload; failures are raised instead.
    """

    ok: bool = True

    @classmethod
    def empty(cls) -> "TaskResult":
        """Return the empty success result."""
        return cls()
