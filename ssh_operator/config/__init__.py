"""Configuration module for the SSH operator.

- TaskParams: Typed access to task parameters with nested-section merge
- HostKeyPolicy: SSH host key verification policy
- Settings: Environment variable configuration
"""

from ssh_operator.config.host_keys import HostKeyPolicy
from ssh_operator.config.params import TaskParams
from ssh_operator.config.settings import Settings

__all__ = ["HostKeyPolicy", "Settings", "TaskParams"]
