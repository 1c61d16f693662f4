"""Credential providers: attach authentication to outgoing requests.

A provider is consulted once per call, before the first attempt. It returns a
decorated copy of the prepared request and never mutates the original. The
same provider is shared by every concurrent call on a client, so it must not
keep per-request state.

Example:
    ```python
    from nvisy_sdk.auth import ApiKeyProvider

    provider = ApiKeyProvider("your-api-key")
    authed = provider.apply(prepared_request)
    ```
"""

import logging
from abc import ABC, abstractmethod

from nvisy_sdk.errors.exceptions import AuthError
from nvisy_sdk.transport.base import PreparedRequest

logger = logging.getLogger(__name__)

REDACTED = "***"


class CredentialProvider(ABC):
    """Supplies authentication for each outgoing request.

    Subclasses holding refreshable credentials can override :meth:`apply` to
    fetch a fresh token; static providers just stamp a header.
    """

    @abstractmethod
    def apply(self, request: PreparedRequest) -> PreparedRequest:
        """Return a copy of ``request`` carrying the credential.

        Raises:
            AuthError: If the credential is missing or unusable.
        """

    @abstractmethod
    def secrets(self) -> tuple[str, ...]:
        """Secret values that must never appear in diagnostic output."""

    def redact(self, text: str) -> str:
        """Replace every secret occurring in ``text`` with ``***``."""
        for secret in self.secrets():
            if secret:
                text = text.replace(secret, REDACTED)
        return text


class ApiKeyProvider(CredentialProvider):
    """Static API key sent as ``Authorization: Bearer <key>``.

    Args:
        api_key: The API key.
        header_name: Header carrying the credential (default: Authorization).
        scheme: Prefix placed before the key; empty string sends the bare key.
    """

    def __init__(self, api_key: str, *, header_name: str = "Authorization", scheme: str = "Bearer"):
        self._api_key = api_key
        self.header_name = header_name
        self.scheme = scheme

    def apply(self, request: PreparedRequest) -> PreparedRequest:
        if not self._api_key or not self._api_key.strip():
            logger.debug(f"Refusing to send {request.method} {request.url}: API key is empty")
            raise AuthError("API key is missing or blank")
        # header values must be printable ASCII; CR/LF would split the header
        if not (self._api_key.isascii() and self._api_key.isprintable()):
            logger.debug(f"Refusing to send {request.method} {request.url}: API key has invalid characters")
            raise AuthError("API key contains characters that cannot be sent in an HTTP header")
        value = f"{self.scheme} {self._api_key}" if self.scheme else self._api_key
        return request.with_header(self.header_name, value)

    def secrets(self) -> tuple[str, ...]:
        return (self._api_key,)

    def __repr__(self) -> str:
        return f"ApiKeyProvider(header_name={self.header_name!r}, api_key={REDACTED!r})"
