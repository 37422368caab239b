"""Provider registry -- named factories and entry-point discovery.

The :class:`ProviderRegistry` maps provider names (as used in
``Settings.providers``) to factories that build a
:class:`~acfkey.providers.base.KeyProvider` from the effective
:class:`~acfkey.models.Settings`. The built-in ``env`` and ``dotenv``
providers are always registered; third-party packages can contribute more
by declaring an entry point in the ``acfkey.providers`` group::

    [project.entry-points."acfkey.providers"]
    vault = "my_package.vault:make_vault_provider"

The entry point must load to a callable taking ``Settings`` and returning a
``KeyProvider`` (a ``KeyProvider`` subclass with such a constructor works).
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Callable

from acfkey.exceptions import ConfigError, PluginError
from acfkey.models import Settings
from acfkey.providers.base import KeyProvider
from acfkey.providers.chain import ProviderChain
from acfkey.providers.dotenv_file import DotenvKeyProvider
from acfkey.providers.environment import EnvironmentKeyProvider

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "acfkey.providers"
"""The entry-point group name used for provider discovery."""

ProviderFactory = Callable[[Settings], KeyProvider]


class ProviderRegistry:
    """Registry of provider factories keyed by provider name.

    Example::

        registry = create_default_registry()
        registry.discover(settings)
        chain = registry.build_chain(settings)
    """

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        """Register *factory* under *name*.

        Raises:
            PluginError: If *name* is already registered.
        """
        if name in self._factories:
            raise PluginError(f"Key provider '{name}' is already registered")
        self._factories[name] = factory

    def names(self) -> list[str]:
        """Return all registered provider names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def create(self, name: str, settings: Settings) -> KeyProvider:
        """Build the provider registered as *name*.

        Raises:
            ConfigError: If no provider is registered under *name*.
        """
        factory = self._factories.get(name)
        if factory is None:
            available = ", ".join(self.names()) or "(none)"
            raise ConfigError(
                f"Unknown key provider '{name}'. Available providers: {available}"
            )
        return factory(settings)

    def build_chain(self, settings: Settings) -> ProviderChain:
        """Build a :class:`ProviderChain` in the order given by ``settings.providers``.

        Raises:
            ConfigError: If the provider list is empty or names an unknown
                provider.
        """
        if not settings.providers:
            raise ConfigError("No key providers configured")
        return ProviderChain(self.create(name, settings) for name in settings.providers)

    def discover(self, settings: Settings) -> list[str]:
        """Register third-party providers from the ``acfkey.providers`` entry points.

        ``settings.plugins.enabled`` acts as an allowlist when non-empty;
        ``settings.plugins.disabled`` is always honoured. Entry points that
        fail to load are logged and skipped.

        Returns:
            Names of the providers that were registered.
        """
        loaded: list[str] = []
        enabled_set = set(settings.plugins.enabled)
        disabled_set = set(settings.plugins.disabled)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            name = ep.name
            if enabled_set and name not in enabled_set:
                logger.debug("Provider plugin '%s' not in enabled list, skipping", name)
                continue
            if name in disabled_set:
                logger.debug("Provider plugin '%s' is disabled, skipping", name)
                continue

            try:
                factory = ep.load()
                self.register(name, factory)
                loaded.append(name)
            except Exception as exc:
                logger.warning("Failed to load provider plugin '%s': %s", name, exc)
            else:
                logger.info("Loaded provider plugin '%s'", name)

        return loaded


def create_default_registry() -> ProviderRegistry:
    """Create a :class:`ProviderRegistry` with the built-in providers.

    - ``env`` -- :class:`~acfkey.providers.environment.EnvironmentKeyProvider`
    - ``dotenv`` -- :class:`~acfkey.providers.dotenv_file.DotenvKeyProvider`
      reading ``settings.env_file``
    """
    registry = ProviderRegistry()
    registry.register("env", lambda settings: EnvironmentKeyProvider())
    registry.register("dotenv", lambda settings: DotenvKeyProvider(settings.env_file))
    return registry
