"""Multi-source settings resolution for the configuration delegate.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

Example:
    ```python
    from jsonapi_client_core.client import JsonApiClient
    from jsonapi_client_core.config import load_delegate

    # Reads JSONAPI_BASE_URL and JSONAPI_ACCESS_TOKEN (or JSONAPI_ACCESS_TOKEN_FILE)
    JsonApiClient.configure(load_delegate())
    ```

Security Considerations:
    - Tokens are never logged in full (masked with ***)
    - Token files have surrounding whitespace stripped
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from jsonapi_client_core.config.delegate import PaginationParams, StaticDelegate
from jsonapi_client_core.errors.exceptions import LocalError

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "JSONAPI_"


class SettingsResolver:
    """Resolve settings from explicit values, the environment, .env files and defaults.

    Attributes:
        _dotenv_loaded: Whether the .env file has been loaded.
        _dotenv_lock: Thread lock guarding the one-time .env load.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to .env file. If None, python-dotenv searches
                parent directories.
            load_dotenv: Whether to load the .env file at all.
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for settings resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        secret: bool = False,
    ) -> str | None:
        """Resolve a single setting; the first source holding a value wins.

        Args:
            value: Explicit value, overrides every other source.
            env_var_name: Environment variable to consult (.env values are
                visible here once loaded).
            default: Fallback value.
            secret: Mask the resolved value in log messages.

        Returns:
            The resolved value, or None when no source has one.
        """
        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"
        else:
            return None

        shown = "***" if secret else result
        logger.debug(f"Resolved setting from {source}: {shown}")
        return result

    def resolve_from_file(self, *, file_path: str | Path | None = None, env_var_name: str | None = None) -> str | None:
        """Read a setting from a file whose path is given directly or via an env var.

        `~` and `$VAR` are expanded in the path. A missing file resolves to
        None; other read failures raise LocalError.
        """
        path_to_use = str(file_path) if file_path is not None else self.resolve(env_var_name=env_var_name)
        if not path_to_use:
            return None

        path = Path(os.path.expanduser(os.path.expandvars(path_to_use)))
        try:
            content = path.read_text().strip()
        except FileNotFoundError:
            logger.debug(f"Settings file not found: {path}")
            return None
        except OSError as e:
            raise LocalError(f"Error reading settings file {path}: {e}") from e

        logger.debug(f"Resolved setting from file: {path} (***)")
        return content


def load_delegate(
    prefix: str = DEFAULT_PREFIX,
    *,
    resolver: SettingsResolver | None = None,
    base_url: str | None = None,
    access_token: str | None = None,
    pagination_params: PaginationParams | None = None,
) -> StaticDelegate:
    """Build a StaticDelegate from `<prefix>BASE_URL` and `<prefix>ACCESS_TOKEN`.

    The token may instead live in the file named by `<prefix>ACCESS_TOKEN_FILE`.

    Raises:
        LocalError: If no base URL can be resolved.
    """
    resolver = resolver or SettingsResolver()

    endpoint = resolver.resolve(value=base_url, env_var_name=f"{prefix}BASE_URL")
    if endpoint is None:
        raise LocalError(f"API endpoint not configured (checked env var: {prefix}BASE_URL)")

    token = resolver.resolve(value=access_token, env_var_name=f"{prefix}ACCESS_TOKEN", secret=True)
    if token is None:
        token = resolver.resolve_from_file(env_var_name=f"{prefix}ACCESS_TOKEN_FILE")

    return StaticDelegate(api_endpoint=endpoint, access_token=token, pagination_params=pagination_params)
