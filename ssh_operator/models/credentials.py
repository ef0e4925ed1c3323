"""Authentication material for one invocation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PasswordCredentials:
    """Password authentication."""

    user: str
    password: str = field(repr=False)

    @property
    def method(self) -> str:
        return "password"


@dataclass(frozen=True)
class PublicKeyCredentials:
    """Public key authentication from OpenSSH key material."""

    user: str
    private_key: str = field(repr=False)
    public_key: str = field(repr=False)
    passphrase: str | None = field(default=None, repr=False)

    @property
    def method(self) -> str:
        return "publickey"


Credentials = PasswordCredentials | PublicKeyCredentials
