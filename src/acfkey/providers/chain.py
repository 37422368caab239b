"""Ordered provider chain -- the license-key resolution policy.

The :class:`ProviderChain` asks each :class:`~acfkey.providers.base.KeyProvider`
in turn and stops at the first one that has the key. Order is precedence:
earlier providers win. When every provider comes back empty the chain raises
:class:`~acfkey.exceptions.MissingKeyError`, which names the environment
variable the operator should set.

The default chain is environment first, then ``.env``::

    chain = create_default_chain()
    key = chain.resolve()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Union

from acfkey.exceptions import ConfigError, MissingKeyError
from acfkey.models import ResolvedKey
from acfkey.providers.base import LICENSE_KEY_VARIABLE, KeyProvider
from acfkey.providers.dotenv_file import DEFAULT_ENV_FILE, DotenvKeyProvider
from acfkey.providers.environment import EnvironmentKeyProvider

logger = logging.getLogger(__name__)


class ProviderChain:
    """An ordered, non-empty sequence of key providers.

    The chain holds an immutable snapshot of the providers passed in, so
    later changes to the caller's list do not alter precedence.

    Args:
        providers: Providers in precedence order.
        variable_name: Variable named in :class:`MissingKeyError` when no
            provider has the key.

    Raises:
        ConfigError: If *providers* is empty.
    """

    def __init__(
        self,
        providers: Iterable[KeyProvider],
        variable_name: str = LICENSE_KEY_VARIABLE,
    ) -> None:
        self._providers = tuple(providers)
        if not self._providers:
            raise ConfigError("A provider chain needs at least one key provider")
        self._variable_name = variable_name

    @property
    def providers(self) -> tuple[KeyProvider, ...]:
        return self._providers

    @property
    def variable_name(self) -> str:
        return self._variable_name

    def __iter__(self) -> Iterator[KeyProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def lookup(self) -> ResolvedKey:
        """Resolve the key and report which provider supplied it.

        Returns:
            A :class:`~acfkey.models.ResolvedKey` from the first provider
            that returned a value.

        Raises:
            MissingKeyError: If every provider returned ``None``.
        """
        for provider in self._providers:
            value = provider.resolve()
            if value:
                logger.debug("License key resolved by provider '%s'", provider.name)
                return ResolvedKey(key=value, source=provider.name)
            logger.debug("Provider '%s' has no license key", provider.name)

        raise MissingKeyError(
            self._variable_name,
            sources=[provider.name for provider in self._providers],
        )

    def resolve(self) -> str:
        """Return the first key found, short-circuiting the remaining providers.

        Raises:
            MissingKeyError: If every provider returned ``None``.
        """
        return self.lookup().key


def create_default_chain(env_file: Union[str, Path] = DEFAULT_ENV_FILE) -> ProviderChain:
    """Create the standard chain: environment variable, then dot-file.

    Args:
        env_file: Dot-file searched by the second provider.

    Returns:
        A :class:`ProviderChain` with the environment taking precedence.
    """
    return ProviderChain(
        [EnvironmentKeyProvider(), DotenvKeyProvider(env_file)],
    )
