"""Pre-download extension point: event type, dispatcher, and wiring helper.

The host tool raises a *pre-download* notification just before it fetches a
URL. This module gives that notification a shape and a place to land:

* :class:`PreDownloadEvent` -- carries the processed URL and the host's
  current :class:`~acfkey.models.FetchConfig`, and collects an optional
  replacement configuration.
* :class:`EventDispatcher` -- a registry of plain callables per event name,
  invoked in registration order.
* :func:`register_injector` -- registers a
  :class:`~acfkey.handler.LicenseKeyInjector` against :data:`PRE_DOWNLOAD`.

The injector itself does not know about any of this; it only needs a URL and
a configuration. Hosts with their own event system can call
:meth:`~acfkey.handler.LicenseKeyInjector.handle` directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from acfkey.models import FetchConfig

if TYPE_CHECKING:
    from acfkey.handler import LicenseKeyInjector

logger = logging.getLogger(__name__)

PRE_DOWNLOAD = "pre-download"
"""Name of the event fired before the host downloads a file."""

EventCallback = Callable[[Any], None]


@dataclass
class PreDownloadEvent:
    """Notification raised by the host before fetching :attr:`processed_url`.

    Attributes:
        processed_url: The URL the host is about to fetch.
        config: The host's current fetch configuration. Handlers must not
            mutate it; they install a replacement instead.
        replacement: The configuration a handler asked the host to use
            instead, or ``None`` to leave the download unchanged.
    """

    processed_url: str
    config: FetchConfig
    replacement: Optional[FetchConfig] = None

    def replace_config(self, config: FetchConfig) -> None:
        """Ask the host to fetch with *config* instead of :attr:`config`."""
        self.replacement = config

    @property
    def effective_config(self) -> FetchConfig:
        """The configuration the host should actually use."""
        return self.replacement if self.replacement is not None else self.config


class EventDispatcher:
    """Registry of event callbacks, dispatched in registration order.

    Exceptions raised by a callback propagate to the caller of
    :meth:`dispatch` and stop the remaining callbacks; the host decides what
    a failed download attempt means for the overall run.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, list[EventCallback]] = {}

    def register(self, event_name: str, callback: EventCallback) -> None:
        """Subscribe *callback* to *event_name*."""
        self._callbacks.setdefault(event_name, []).append(callback)

    def subscribed_events(self) -> dict[str, list[EventCallback]]:
        """Return a copy of the event name to callback-list mapping."""
        return {name: list(callbacks) for name, callbacks in self._callbacks.items()}

    def dispatch(self, event_name: str, event: Any) -> Any:
        """Invoke every callback registered for *event_name* with *event*.

        Returns:
            The same *event* instance, after all callbacks have run.
        """
        callbacks = self._callbacks.get(event_name, [])
        logger.debug("Dispatching '%s' to %d callback(s)", event_name, len(callbacks))
        for callback in callbacks:
            callback(event)
        return event


def register_injector(
    dispatcher: EventDispatcher,
    injector: Optional[LicenseKeyInjector] = None,
) -> LicenseKeyInjector:
    """Subscribe a license-key injector to :data:`PRE_DOWNLOAD`.

    Args:
        dispatcher: The dispatcher to register with.
        injector: The injector to register. When ``None``, one is built from
            the project settings with :func:`~acfkey.handler.create_injector`.

    Returns:
        The registered injector.
    """
    if injector is None:
        from acfkey.handler import create_injector

        injector = create_injector()
    dispatcher.register(PRE_DOWNLOAD, injector)
    return injector
