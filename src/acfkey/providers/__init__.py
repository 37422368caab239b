"""License-key providers and the chain that orders them.

Key classes:

* :class:`KeyProvider` -- Abstract base class for a single key source.
* :class:`EnvironmentKeyProvider` -- Reads ``ACF_PRO_KEY`` from the environment.
* :class:`DotenvKeyProvider` -- Reads ``ACF_PRO_KEY`` from a ``.env`` file.
* :class:`ProviderChain` -- First-match-wins resolution across providers.
* :class:`ProviderRegistry` -- Named provider factories plus entry-point
  discovery.

Typical usage::

    from acfkey.providers import create_default_chain

    key = create_default_chain().resolve()
"""

from acfkey.providers.base import LICENSE_KEY_VARIABLE, KeyProvider
from acfkey.providers.chain import ProviderChain, create_default_chain
from acfkey.providers.dotenv_file import DotenvKeyProvider
from acfkey.providers.environment import EnvironmentKeyProvider
from acfkey.providers.registry import ProviderRegistry, create_default_registry

__all__ = [
    "LICENSE_KEY_VARIABLE",
    "KeyProvider",
    "EnvironmentKeyProvider",
    "DotenvKeyProvider",
    "ProviderChain",
    "ProviderRegistry",
    "create_default_chain",
    "create_default_registry",
]
