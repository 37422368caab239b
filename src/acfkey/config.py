"""Configuration management with precedence resolution.

acfkey has no persistent user configuration of its own; everything that can
be tuned lives in a project-local ``./acfkey.json`` next to the ``.env`` file
and can be overridden from the environment or the command line.

* **Project config** -- :func:`load_project_config` reads ``./acfkey.json``.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  ``ACFKEY_*`` environment variables, project config and defaults into a
  :class:`~acfkey.models.Settings`.
* **Data directory** -- :func:`get_data_dir` is the XDG-aware location for
  crash logs.

The license key itself is never read or written here; that is the job of the
providers in :mod:`acfkey.providers`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from acfkey.exceptions import ConfigError
from acfkey.models import Settings

_APP_NAME = "acfkey"
_PROJECT_CONFIG_FILENAME = "acfkey.json"

ENV_FILE_VARIABLE = "ACFKEY_ENV_FILE"
PROVIDERS_VARIABLE = "ACFKEY_PROVIDERS"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/acfkey/`` (default ``~/.local/share/acfkey/``).
    On macOS/Windows: ``~/.acfkey/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``acfkey.json``.

    Args:
        directory: Directory to look in. Defaults to the working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _split_providers(value: str) -> list[str]:
    return [name.strip() for name in value.split(",") if name.strip()]


# --- Precedence resolution ---


def resolve_settings(
    cli_env_file: Optional[str] = None,
    cli_providers: Optional[list[str]] = None,
) -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_env_file``, ``cli_providers``)
        2. Environment variables (``ACFKEY_ENV_FILE``, ``ACFKEY_PROVIDERS``)
        3. Project config (``./acfkey.json``)
        4. Defaults

    Returns:
        The effective :class:`~acfkey.models.Settings`.

    Raises:
        ConfigError: If the project config is invalid or the resulting
            provider list is empty.
    """
    # 4 + 3. Defaults overlaid with project config
    data: dict[str, Any] = load_project_config() or {}
    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid project config: {exc}") from exc

    # 2. Environment variables
    env_file = os.environ.get(ENV_FILE_VARIABLE)
    if env_file:
        settings.env_file = env_file
    env_providers = os.environ.get(PROVIDERS_VARIABLE)
    if env_providers:
        settings.providers = _split_providers(env_providers)

    # 1. CLI flags
    if cli_env_file is not None:
        settings.env_file = cli_env_file
    if cli_providers:
        settings.providers = list(cli_providers)

    if not settings.providers:
        raise ConfigError("No key providers configured")
    return settings
