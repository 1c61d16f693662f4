"""Authentication for the Nvisy SDK.

- Credential providers that attach the API key to every request
- Multi-source resolution of the API key (value → env → .env → key file)
"""

from nvisy_sdk.auth.credentials import CredentialResolver
from nvisy_sdk.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from nvisy_sdk.auth.provider import ApiKeyProvider, CredentialProvider

__all__ = [
    "ApiKeyProvider",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialProvider",
    "CredentialResolver",
]
