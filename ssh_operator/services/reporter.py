"""Log command output and turn the exit status into a task result."""

import logging
import re

from ssh_operator.errors import CommandFailed
from ssh_operator.models import CommandOutcome, TaskResult

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def output_lines(text: str) -> list[str]:
    """Split output into lines, dropping trailing empty lines."""
    lines = _LINE_BREAK.split(text)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _log_output(title: str, text: str) -> None:
    logger.info(title)
    for line in output_lines(text):
        logger.info("  %s", line)


def report_outcome(
    outcome: CommandOutcome,
    stdout_log: bool = True,
    stderr_log: bool = False,
) -> TaskResult:
    """Log the captured streams and classify the exit status.

    Raises:
        CommandFailed: If the exit status is non-zero
    """
    if stdout_log:
        _log_output("STDOUT output", outcome.stdout_text)
    if stderr_log:
        _log_output("STDERR output", outcome.stderr_text)

    logger.info("Status: %d", outcome.exit_status)
    if outcome.exit_status != 0:
        raise CommandFailed(outcome.exit_status)
    return TaskResult.empty()
