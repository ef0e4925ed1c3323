"""Colorful console logging for the SSH operator."""

import logging
import re
import sys
from datetime import datetime

from ssh_operator.config import Settings

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bg_red": "\033[41m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "ssh_operator.services.session": COLORS["bright_magenta"],
    "ssh_operator.services.retry": COLORS["bright_yellow"],
    "ssh_operator.services.reporter": COLORS["bright_blue"],
    "ssh_operator.config": COLORS["cyan"],
    "default": COLORS["white"],
}

_SSH_TARGET = re.compile(r"(\w+@[\w.\-]+:\d+|[\w.\-]+:\d+)")
_DURATION = re.compile(r"(\d+\.?\d*m?s\b)")
_STATUS = re.compile(r"^(Status: )(-?\d+)$")


class ColorfulFormatter(logging.Formatter):
    """Log formatter with component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created)
        return f"{dt:%H:%M:%S}.{int(record.msecs):03d} {dt:%m/%d}"

    def _format_level(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        return self._colorize(f"{level:<8}", color)

    def _format_component(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("ssh_operator."):
            name = name[len("ssh_operator."):]
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as ``time | LEVEL | component | message``."""
        timestamp = self._colorize(self._format_timestamp(record), COLORS["dim"])
        level = self._format_level(record)
        component = self._format_component(record)
        sep = self._colorize("|", COLORS["dim"])
        message = self._highlight_message(record.getMessage())

        line = f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _highlight_message(self, message: str) -> str:
        """Highlight connection targets, durations and exit status."""
        if not self.use_colors:
            return message

        message = _SSH_TARGET.sub(
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
        )
        message = _DURATION.sub(
            f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
        )

        status = _STATUS.match(message)
        if status:
            color = COLORS["bright_green"] if status.group(2) == "0" else COLORS["bright_red"]
            message = f"{status.group(1)}{color}{status.group(2)}{COLORS['reset']}"

        return message


def configure_logging(settings: Settings) -> None:
    """Install a stderr handler on the ``ssh_operator`` logger.

    Colors are used only when enabled and stderr is a TTY. Calling this
    more than once leaves the existing handler in place.
    """
    use_colors = settings.log_colors and sys.stderr.isatty()

    package_logger = logging.getLogger("ssh_operator")
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColorfulFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    # asyncssh logs every channel and auth step at INFO
    logging.getLogger("asyncssh").setLevel(logging.WARNING)
