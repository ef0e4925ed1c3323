"""Secret providers backed by a mapping or the process environment."""

import logging
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping

from ssh_operator.errors import MissingCredential

logger = logging.getLogger(__name__)


class _BaseSecretProvider(ABC):
    namespace: str

    @abstractmethod
    def get_secret_optional(self, name: str) -> str | None:
        """Return the secret value, or None if it is not set."""

    def get_secret(self, name: str) -> str:
        value = self.get_secret_optional(name)
        if value is None:
            raise MissingCredential(
                name, f"Secret '{name}' not set in namespace '{self.namespace}'"
            )
        return value


class MappingSecretProvider(_BaseSecretProvider):
    """Secrets of one namespace held in memory."""

    def __init__(self, namespace: str, values: Mapping[str, str]) -> None:
        self.namespace = namespace
        self._values = dict(values)

    def get_secret_optional(self, name: str) -> str | None:
        return self._values.get(name)


class StaticSecretStore:
    """Secret store over a ``{namespace: {name: value}}`` mapping."""

    def __init__(self, secrets: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._secrets = {ns: dict(values) for ns, values in (secrets or {}).items()}

    def get_secrets(self, namespace: str) -> MappingSecretProvider:
        return MappingSecretProvider(namespace, self._secrets.get(namespace, {}))


class EnvSecretProvider(_BaseSecretProvider):
    """Secrets read from ``<PREFIX><NAMESPACE>_<NAME>`` environment variables.

    Names are upper-cased and non-alphanumeric characters become ``_``, so
    ``ssh`` / ``private_key`` reads ``SSH_SECRET_SSH_PRIVATE_KEY`` with the
    default prefix.
    """

    def __init__(self, namespace: str, prefix: str = "SSH_SECRET_") -> None:
        self.namespace = namespace
        self.prefix = prefix

    def env_key(self, name: str) -> str:
        return _env_name(f"{self.prefix}{self.namespace}_{name}")

    def get_secret_optional(self, name: str) -> str | None:
        key = self.env_key(name)
        value = os.getenv(key)
        if value is None:
            logger.debug("Secret %s not found in environment (%s)", name, key)
        return value


class EnvSecretStore:
    """Secret store over the process environment."""

    def __init__(self, prefix: str = "SSH_SECRET_") -> None:
        self.prefix = prefix

    def get_secrets(self, namespace: str) -> EnvSecretProvider:
        return EnvSecretProvider(namespace, prefix=self.prefix)


def _env_name(raw: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "_", raw).upper()
