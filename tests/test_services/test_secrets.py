"""Tests for secret providers."""

import pytest

from ssh_operator.errors import MissingCredential
from ssh_operator.protocols import SecretProvider, SecretStore
from ssh_operator.services.secrets import (
    EnvSecretStore,
    StaticSecretStore,
    _BaseSecretProvider,
)


class TestStaticSecretStore:
    """In-memory secret store."""

    def test_scoped_lookup(self) -> None:
        """Providers only see their own namespace."""
        store = StaticSecretStore({"ssh": {"password": "pw"}, "db": {"password": "other"}})

        assert store.get_secrets("ssh").get_secret("password") == "pw"
        assert store.get_secrets("db").get_secret("password") == "other"

    def test_missing_secret(self) -> None:
        """get_secret raises, get_secret_optional returns None."""
        secrets = StaticSecretStore({"ssh": {}}).get_secrets("ssh")

        assert secrets.get_secret_optional("password") is None
        with pytest.raises(MissingCredential, match="'password' not set in namespace 'ssh'"):
            secrets.get_secret("password")

    def test_unknown_namespace_is_empty(self) -> None:
        """Unknown namespaces have no secrets."""
        assert StaticSecretStore().get_secrets("ssh").get_secret_optional("x") is None

    def test_satisfies_protocols(self) -> None:
        """Store and provider implement the secret protocols."""
        store = StaticSecretStore()

        assert isinstance(store, SecretStore)
        assert isinstance(store.get_secrets("ssh"), SecretProvider)


class TestEnvSecretStore:
    """Environment-backed secret store."""

    def test_reads_prefixed_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Names map to PREFIX + NAMESPACE + NAME, upper-cased."""
        monkeypatch.setenv("SSH_SECRET_SSH_PRIVATE_KEY", "-----BEGIN")

        secrets = EnvSecretStore().get_secrets("ssh")

        assert secrets.get_secret("private_key") == "-----BEGIN"

    def test_custom_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Prefix is configurable."""
        monkeypatch.setenv("WF_SSH_PASSWORD", "pw")

        assert EnvSecretStore(prefix="WF_").get_secrets("ssh").get_secret("password") == "pw"

    def test_env_key_sanitized(self) -> None:
        """Non-alphanumeric characters become underscores."""
        provider = EnvSecretStore().get_secrets("ssh")

        assert provider.env_key("db.password-alt") == "SSH_SECRET_SSH_DB_PASSWORD_ALT"

    def test_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Absent variables are missing secrets."""
        monkeypatch.delenv("SSH_SECRET_SSH_PASSWORD", raising=False)
        secrets = EnvSecretStore().get_secrets("ssh")

        assert secrets.get_secret_optional("password") is None
        with pytest.raises(MissingCredential):
            secrets.get_secret("password")


def test_provider_requires_lookup() -> None:
    """A provider without get_secret_optional cannot be created."""

    class Incomplete(_BaseSecretProvider):
        namespace = "ssh"

    with pytest.raises(TypeError):
        Incomplete()
