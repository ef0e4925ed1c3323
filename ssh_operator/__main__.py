"""Run a single SSH task outside a workflow engine.

Usage:
    python -m ssh_operator PARAMS.json

PARAMS.json holds the task parameters as a JSON object. Secrets come from
``SSH_SECRET_SSH_<NAME>`` environment variables (prefix configurable with
``SSH_OPERATOR_SECRET_PREFIX``).
"""

import json
import logging
import sys
from pathlib import Path

from ssh_operator.config import Settings, TaskParams
from ssh_operator.errors import SSHOperatorError
from ssh_operator.operator import OperatorContext, SSHOperatorFactory
from ssh_operator.services import EnvSecretStore
from ssh_operator.utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_USAGE = 2


def load_params(path: Path) -> TaskParams:
    """Read task parameters from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not a JSON object
    """
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return TaskParams(data)


def main(argv: list[str] | None = None) -> int:
    """Run one task and return the process exit code."""
    settings = Settings.from_env()
    configure_logging(settings)

    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        logger.error("Usage: python -m ssh_operator PARAMS.json")
        return EXIT_USAGE

    try:
        params = load_params(Path(args[0]))
    except (OSError, ValueError) as e:
        logger.error("Cannot load task parameters: %s", e)
        return EXIT_USAGE

    context = OperatorContext(
        config=params,
        secrets=EnvSecretStore(prefix=settings.secret_prefix),
    )
    operator = SSHOperatorFactory().new_operator(context)

    try:
        operator.run_task()
    except SSHOperatorError as e:
        logger.error("Task failed: %s", e)
        return EXIT_TASK_FAILED

    logger.info("Task completed")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
