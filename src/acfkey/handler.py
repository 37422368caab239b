"""Pre-download handler: matcher, then provider chain, then augmenter.

:class:`LicenseKeyInjector` is the only component the host talks to. For each
notification it either leaves the download alone or returns a replacement
fetch configuration whose URL carries the license key.

Two outcomes only:

* *untouched* -- the URL is not the vendor endpoint. Neither the provider
  chain nor the augmenter is consulted.
* *augmented* -- the URL matched, the chain produced a key, and the
  augmenter built a new configuration.

When the URL matches but no key can be found,
:class:`~acfkey.exceptions.MissingKeyError` propagates to the host, which
aborts that download. Nothing is retried and no default key is substituted.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from acfkey.augmenter import RequestAugmenter
from acfkey.matcher import UrlMatcher
from acfkey.models import DownloadRequest, FetchConfig, Settings
from acfkey.providers.chain import ProviderChain

logger = logging.getLogger(__name__)


class LicenseKeyInjector:
    """Inject the license key into matching download requests.

    Args:
        chain: Provider chain used to resolve the key.
        matcher: Allow-list matcher; defaults to the ACF PRO endpoint.
        augmenter: Builds the replacement configuration.

    Example::

        injector = LicenseKeyInjector(create_default_chain())
        replacement = injector.handle(url, config)
        if replacement is not None:
            config = replacement
    """

    def __init__(
        self,
        chain: ProviderChain,
        matcher: Optional[UrlMatcher] = None,
        augmenter: Optional[RequestAugmenter] = None,
    ) -> None:
        self._chain = chain
        self._matcher = matcher or UrlMatcher()
        self._augmenter = augmenter or RequestAugmenter()

    @property
    def chain(self) -> ProviderChain:
        return self._chain

    def handle(self, url: str, config: FetchConfig) -> Optional[FetchConfig]:
        """Return a replacement configuration for *url*, or ``None`` to leave it alone.

        Raises:
            MissingKeyError: If *url* matched but no provider had the key.
        """
        if not self._matcher.matches(url):
            return None
        return self._augment(url, config)

    def handle_request(self, request: DownloadRequest) -> Optional[FetchConfig]:
        """Same as :meth:`handle`, for a :class:`~acfkey.models.DownloadRequest`."""
        return self.handle(request.processed_url, request.config)

    def __call__(self, event: Any) -> None:
        """Handle a :class:`~acfkey.hooks.PreDownloadEvent`.

        The event's configuration is only read when the URL matches, and the
        replacement is installed through ``event.replace_config``.
        """
        url = event.processed_url
        if not self._matcher.matches(url):
            return
        event.replace_config(self._augment(url, event.config))

    def _augment(self, url: str, config: FetchConfig) -> FetchConfig:
        key = self._chain.resolve()
        logger.info("Adding ACF PRO license key to download %s", url)
        return self._augmenter.augment(url, key, config)


def create_injector(settings: Optional[Settings] = None) -> LicenseKeyInjector:
    """Build an injector whose provider chain follows *settings*.

    Args:
        settings: Effective settings. When ``None``, they are resolved from
            the environment and ``./acfkey.json`` via
            :func:`~acfkey.config.resolve_settings`.

    Returns:
        A ready-to-register :class:`LicenseKeyInjector`.
    """
    from acfkey.providers.registry import create_default_registry

    if settings is None:
        from acfkey.config import resolve_settings

        settings = resolve_settings()

    registry = create_default_registry()
    registry.discover(settings)
    return LicenseKeyInjector(registry.build_chain(settings))
