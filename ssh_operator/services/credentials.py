"""Select the authentication method and gather its secrets."""

import logging

from ssh_operator.config import TaskParams
from ssh_operator.errors import MissingCredential, UnsupportedFeature
from ssh_operator.models import (
    Credentials,
    PasswordCredentials,
    PublicKeyCredentials,
)
from ssh_operator.protocols import SecretProvider

logger = logging.getLogger(__name__)


def resolve_credentials(secrets: SecretProvider, params: TaskParams) -> Credentials:
    """Build credentials for the user named in ``params``.

    ``password_auth`` selects password authentication; otherwise the
    ``public_key`` and ``private_key`` secrets are used. Passphrase
    protected keys are rejected.

    Raises:
        ConfigurationError: If ``user`` is not set
        MissingCredential: If a required secret is absent
        UnsupportedFeature: If ``public_key_passphrase`` is set
    """
    user = params.get("user", str)

    if params.get("password_auth", bool, False):
        password = _get_password(secrets, params)
        if password is None:
            raise MissingCredential("password", "password not set")
        logger.debug("Resolved password credentials for %s", user)
        return PasswordCredentials(user=user, password=password)

    public_key = secrets.get_secret_optional("public_key")
    if public_key is None:
        raise MissingCredential("public_key")
    if secrets.get_secret_optional("public_key_passphrase") is not None:
        raise UnsupportedFeature("public_key_passphrase is not supported yet")
    private_key = secrets.get_secret_optional("private_key")
    if private_key is None:
        raise MissingCredential("private_key")

    logger.debug("Resolved public key credentials for %s", user)
    return PublicKeyCredentials(
        user=user,
        private_key=private_key,
        public_key=public_key,
    )


def _get_password(secrets: SecretProvider, params: TaskParams) -> str | None:
    # password_override names the secret holding the password
    override_key = params.get_optional("password_override", str)
    if override_key is not None:
        return secrets.get_secret(override_key)
    return secrets.get_secret_optional("password")
