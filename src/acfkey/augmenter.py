"""Build the replacement fetch configuration for the key-augmented URL.

:class:`RequestAugmenter` is a pure data transformation: it never performs
network I/O and never mutates the configuration it was given. The host may
keep using or inspecting the original after the replacement is installed.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import unquote_plus

import httpx

from acfkey.models import FetchConfig

LICENSE_KEY_PARAM = "k"
"""Query parameter the vendor endpoint reads the license key from."""


def add_query_param(url: str, name: str, value: str) -> str:
    """Return *url* with ``name=value`` appended to its query string.

    Only the new pair is encoded; the rest of the query is kept byte for
    byte. An existing parameter called *name* is dropped first so the
    result carries exactly one.
    """
    parsed = httpx.URL(url)
    pairs = [
        pair
        for pair in parsed.query.decode("ascii").split("&")
        if pair and unquote_plus(pair.split("=", 1)[0]) != name
    ]
    pairs.append(str(httpx.QueryParams({name: value})))
    return str(parsed.copy_with(query="&".join(pairs).encode("ascii")))


def _copy_options(value: Any) -> Any:
    # Containers are copied, everything else (contexts, locks, auth objects) is shared.
    if isinstance(value, dict):
        return {key: _copy_options(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy_options(item) for item in value]
    return value


class RequestAugmenter:
    """Produce a new :class:`~acfkey.models.FetchConfig` carrying the license key.

    Args:
        param_name: Query parameter the key is sent under.
    """

    def __init__(self, param_name: str = LICENSE_KEY_PARAM) -> None:
        self._param_name = param_name

    @property
    def param_name(self) -> str:
        return self._param_name

    def augment(self, url: str, key: str, config: FetchConfig) -> FetchConfig:
        """Return a fresh configuration targeting *url* with *key* appended.

        Args:
            url: The matched download URL.
            key: The resolved license key, copied verbatim.
            config: The host's current configuration; left untouched.

        Returns:
            A new :class:`FetchConfig` whose ``options`` equal
            ``config.options``, with nested dicts and lists copied and every
            other value passed through as is, and whose ``tls_disabled``
            equals ``config.tls_disabled``.
        """
        return FetchConfig(
            url=add_query_param(url, self._param_name, key),
            options=_copy_options(config.options),
            tls_disabled=config.tls_disabled,
        )
