"""Environment-variable key provider.

Reads the license key from the process environment. This is the
highest-precedence source in the default chain: an explicit export in the
shell or CI job always beats a value checked into a ``.env`` file.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from acfkey.providers.base import LICENSE_KEY_VARIABLE, KeyProvider

logger = logging.getLogger(__name__)


class EnvironmentKeyProvider(KeyProvider):
    """Resolve the license key from ``os.environ``.

    Args:
        variable: Environment variable to read. Matching is case-sensitive
            wherever the host OS treats environment names that way.
    """

    def __init__(self, variable: str = LICENSE_KEY_VARIABLE) -> None:
        self._variable = variable

    @property
    def name(self) -> str:
        return "env"

    @property
    def description(self) -> str:
        return f"environment variable {self._variable}"

    @property
    def variable(self) -> str:
        return self._variable

    def resolve(self) -> Optional[str]:
        value = os.environ.get(self._variable)
        if not value:
            logger.debug("Environment variable %s is not set", self._variable)
            return None
        logger.debug("Found license key in environment variable %s", self._variable)
        return value
