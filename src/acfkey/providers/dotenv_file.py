"""Dot-file key provider.

Looks for the license key in a shell-style ``NAME=VALUE`` file, by default
``.env`` in the current working directory. The file is parsed with
python-dotenv's :func:`~dotenv.dotenv_values`, which never touches
``os.environ``. Interpolation is disabled so the key is copied verbatim.

Parsing rules:

* blank lines and lines starting with ``#`` are ignored;
* an optional leading ``export`` is accepted;
* single or double quotes around the value are stripped;
* everything after the first ``=`` belongs to the value;
* for unquoted values, a `` #`` and anything after it is a comment;
* malformed lines are skipped with a warning from python-dotenv and do not
  prevent later lines from being read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values

from acfkey.providers.base import LICENSE_KEY_VARIABLE, KeyProvider

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"


class DotenvKeyProvider(KeyProvider):
    """Resolve the license key from a ``.env`` file.

    Args:
        path: Path to the dot-file. Relative paths are resolved against the
            working directory at the time :meth:`resolve` is called, not at
            construction time.
        variable: Name to look up inside the file.
    """

    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_ENV_FILE,
        variable: str = LICENSE_KEY_VARIABLE,
    ) -> None:
        self._path = Path(path)
        self._variable = variable

    @property
    def name(self) -> str:
        return "dotenv"

    @property
    def description(self) -> str:
        return f"{self._variable} in {self._path}"

    @property
    def path(self) -> Path:
        return self._path

    def resolve(self) -> Optional[str]:
        path = self._path if self._path.is_absolute() else Path.cwd() / self._path
        # A missing path reads as an empty file.
        try:
            values = dotenv_values(path, interpolate=False, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            # Unreadable counts as absent.
            logger.debug("Cannot read dot-file %s: %s", path, exc)
            return None

        value = values.get(self._variable)
        if not value:
            logger.debug("%s is not defined in %s", self._variable, path)
            return None
        logger.debug("Found license key for %s in %s", self._variable, path)
        return value
