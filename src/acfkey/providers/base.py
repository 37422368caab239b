"""Abstract base class for license-key providers.

A provider knows how to look for the license key in exactly one place. It
answers :meth:`KeyProvider.resolve` with the key string, or ``None`` when the
source does not have it. Absence is an expected outcome, not an error: the
:class:`~acfkey.providers.chain.ProviderChain` simply moves on to the next
provider.

To add a new source (a secrets manager, a keyring, ...), subclass
:class:`KeyProvider`, implement :attr:`~KeyProvider.name` and
:meth:`~KeyProvider.resolve`, and register a factory with the
:class:`~acfkey.providers.registry.ProviderRegistry` or through the
``acfkey.providers`` entry-point group.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

LICENSE_KEY_VARIABLE = "ACF_PRO_KEY"
"""Well-known variable name holding the license key, in the environment and in ``.env``."""


class KeyProvider(ABC):
    """Base class for all license-key providers.

    Providers are stateless apart from the configuration of where to look,
    and must never write to the source they read.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the short provider name used in settings and diagnostics.

        Returns:
            A lowercase identifier such as ``"env"`` or ``"dotenv"``.
        """
        ...

    @property
    def description(self) -> str:
        """Return a one-line, human-readable description of the source."""
        return ""

    @abstractmethod
    def resolve(self) -> Optional[str]:
        """Look up the license key in this provider's source.

        Returns:
            The non-empty key string, or ``None`` when the source is absent,
            unreadable, or does not define the key.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
