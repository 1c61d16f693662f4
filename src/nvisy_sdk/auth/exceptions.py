"""Exceptions raised while resolving credentials from the environment.

These are configuration-time failures: they surface from
``CredentialResolver`` and ``NvisyConfigBuilder.from_env`` before any client
exists, so they derive from :class:`~nvisy_sdk.errors.ConfigError`.
"""

from nvisy_sdk.errors.exceptions import ConfigError


class CredentialError(ConfigError):
    """Base exception for credential resolution errors."""


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read."""
