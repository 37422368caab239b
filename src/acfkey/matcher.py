"""Allow-list matching of the ACF PRO download endpoint.

Only URLs that point at the one known vendor download endpoint ever get the
license key. The check is structural rather than a substring test: scheme,
host, port and path must equal the endpoint's, and every query parameter of
the endpoint (``p=pro``, ``a=download``) must be present. Extra parameters,
such as the ``t=<version>`` pin package repositories add, are allowed.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

ACF_PRO_DOWNLOAD_URL = "https://connect.advancedcustomfields.com/index.php?p=pro&a=download"
"""The vendor endpoint the license key may be sent to."""


class UrlMatcher:
    """Decide whether a URL is the vendor download endpoint.

    Args:
        endpoint: The allow-listed endpoint URL. Its query parameters are
            the minimum set a candidate URL must carry.
    """

    def __init__(self, endpoint: str = ACF_PRO_DOWNLOAD_URL) -> None:
        self._endpoint = httpx.URL(endpoint)

    @property
    def endpoint(self) -> str:
        return str(self._endpoint)

    def matches(self, url: str) -> bool:
        """Return ``True`` only for URLs that target the allow-listed endpoint."""
        try:
            candidate = httpx.URL(url)
        except (httpx.InvalidURL, TypeError):
            logger.debug("Not matching unparsable URL %r", url)
            return False

        if candidate.scheme.lower() != self._endpoint.scheme.lower():
            return False
        if candidate.host.lower() != self._endpoint.host.lower():
            return False
        if candidate.port != self._endpoint.port:
            return False
        if candidate.path != self._endpoint.path:
            return False

        for name, value in self._endpoint.params.multi_items():
            if value not in candidate.params.get_list(name):
                return False
        return True
