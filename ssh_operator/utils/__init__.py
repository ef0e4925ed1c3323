"""Utility modules for the SSH operator."""

from ssh_operator.utils.console import ColorfulFormatter, configure_logging

__all__ = ["ColorfulFormatter", "configure_logging"]
