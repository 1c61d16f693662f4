"""Lookup of the Nvisy API key and connection settings outside of code.

A setting is taken from the first source that has it:

- a value passed in by the caller
- the process environment, which a ``.env`` file (python-dotenv) feeds once
  per resolver without overriding variables that are already set
- for the API key only, a key file whose path is in ``NVISY_API_KEY_FILE``
- a default supplied by the caller

Example:
    ```python
    from nvisy_sdk.auth import CredentialResolver

    resolver = CredentialResolver()
    api_key = resolver.resolve_api_key(required=True)
    base_url = resolver.resolve(env_var_name="NVISY_BASE_URL", mask_in_logs=False)
    ```

Secret values are never logged, only where they came from.
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from nvisy_sdk.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

API_KEY_ENV = "NVISY_API_KEY"
API_KEY_FILE_ENV = "NVISY_API_KEY_FILE"
BASE_URL_ENV = "NVISY_BASE_URL"
TIMEOUT_ENV = "NVISY_TIMEOUT"


def _read_secret_file(path: Path) -> str:
    try:
        return path.read_text().strip()
    except FileNotFoundError:
        raise CredentialFileError(f"Credential file not found: {path}") from None
    except PermissionError:
        raise CredentialFileError(f"Permission denied reading credential file: {path}") from None
    except OSError as e:
        raise CredentialFileError(f"Error reading credential file {path}: {e}") from e


class CredentialResolver:
    """Looks up Nvisy settings in the caller's environment.

    Args:
        dotenv_path: Location of the .env file. When None, python-dotenv
            looks for one starting from the working directory.
        load_dotenv: Set to False to ignore .env files entirely.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_path = dotenv_path
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        if load_dotenv:
            self._load_dotenv_once()

    def _load_dotenv_once(self) -> None:
        with self._dotenv_lock:
            if self._dotenv_loaded:
                return
            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug(f"Loaded .env file into the environment ({self._dotenv_path or 'auto-discovered'})")
            except OSError as e:
                logger.warning(f"Could not read .env file, continuing without it: {e}")
            # a broken .env still counts as loaded so it is not retried
            self._dotenv_loaded = True

    @staticmethod
    def _mask_credential(value: str | None) -> str:
        return "None" if value is None else "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Return the first of ``value``, ``$env_var_name`` or ``default`` that is set.

        Args:
            value: Value given by the caller; always wins.
            env_var_name: Environment variable to read (.env values included).
            default: Used when neither of the above is set.
            required: Raise instead of returning None.
            mask_in_logs: Log ``***`` instead of the value. Turn off for
                settings that are not secret, such as the base URL.

        Raises:
            CredentialNotFoundError: If ``required`` and no source is set.
        """
        sources = [("explicit parameter", value)]
        if env_var_name:
            sources.append((f"environment variable '{env_var_name}'", os.environ.get(env_var_name)))
        sources.append(("default value", default))

        for source, candidate in sources:
            if candidate is not None:
                shown = self._mask_credential(candidate) if mask_in_logs else candidate
                logger.debug(f"Using {source} for credential: {shown}")
                return candidate

        if required:
            where = f" (checked env var: {env_var_name})" if env_var_name else ""
            raise CredentialNotFoundError(f"Required credential not found{where}", env_var_name=env_var_name)
        return None

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a secret from a file and strip surrounding whitespace.

        The path is ``file_path`` or else the value of ``$env_var_name``.
        ``~`` and ``$VAR`` in the path are expanded. An unreadable file
        yields None unless ``required`` is set.

        Raises:
            CredentialFileError: If ``required`` and no file could be read.
        """
        if file_path is None and env_var_name:
            file_path = self.resolve(env_var_name=env_var_name, mask_in_logs=False) or None

        if file_path is None:
            if required:
                hint = f" (env var '{env_var_name}' not set)" if env_var_name else ""
                raise CredentialFileError(f"No file path provided for credential resolution{hint}")
            return None

        path = Path(os.path.expandvars(os.path.expanduser(str(file_path))))
        try:
            secret = _read_secret_file(path)
        except CredentialFileError as e:
            if required:
                raise
            # a missing file is an ordinary miss; an unreadable one is worth a warning
            logger.log(logging.WARNING if path.exists() else logging.DEBUG, str(e))
            return None

        logger.debug(f"Using credential file {path}: ***")
        return secret

    def resolve_api_key(self, value: str | None = None, *, required: bool = False) -> str | None:
        """Find the Nvisy API key.

        Looks at ``value``, then ``NVISY_API_KEY``, then the file named by
        ``NVISY_API_KEY_FILE``.

        Raises:
            CredentialNotFoundError: If ``required`` and no key was found.
        """
        api_key = self.resolve(value=value, env_var_name=API_KEY_ENV) or self.resolve_from_file(
            env_var_name=API_KEY_FILE_ENV
        )
        if required and not api_key:
            raise CredentialNotFoundError(
                f"Nvisy API key not found (checked {API_KEY_ENV} and {API_KEY_FILE_ENV})",
                env_var_name=API_KEY_ENV,
            )
        return api_key
