"""Canonical Pydantic models shared across all acfkey modules.

The models fall into two groups:

**Request models** -- handed over by the host tool at pre-download time:
    :class:`FetchConfig` and :class:`DownloadRequest`.

**Configuration models** -- read from ``./acfkey.json`` and the environment:
    :class:`PluginsConfig` and :class:`Settings`.

:class:`ResolvedKey` is the result of a provider-chain lookup and only ever
lives for the duration of one notification.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- Request models ---


class FetchConfig(BaseModel):
    """Transport settings for one outbound download, owned by the host.

    acfkey reads only :attr:`options` and :attr:`tls_disabled` from an
    instance and copies them into a freshly built replacement. Host tools
    may attach extra fields; they are preserved in ``model_extra`` but
    never copied.

    Example::

        FetchConfig(
            url="https://connect.advancedcustomfields.com/index.php?p=pro&a=download",
            options={"http": {"timeout": 30}},
            tls_disabled=False,
        )
    """

    model_config = ConfigDict(extra="allow")

    url: str = Field(default="", description="URL this configuration fetches")
    options: dict[str, Any] = Field(
        default_factory=dict, description="Arbitrary transport options"
    )
    tls_disabled: bool = Field(
        default=False, description="Whether TLS verification is disabled"
    )


class DownloadRequest(BaseModel):
    """A processed URL paired with the fetch configuration that will fetch it."""

    processed_url: str
    config: FetchConfig = Field(default_factory=FetchConfig)


class ResolvedKey(BaseModel):
    """A license key together with the name of the provider that produced it."""

    key: str
    source: str

    def masked(self, visible: int = 4) -> str:
        """Return the key with all but the last *visible* characters hidden."""
        if len(self.key) <= visible:
            return "*" * len(self.key)
        return "*" * (len(self.key) - visible) + self.key[-visible:]


# --- Configuration models ---


class PluginsConfig(BaseModel):
    """Explicit allow/deny lists for entry-point key providers."""

    enabled: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)


class Settings(BaseModel):
    """Effective acfkey configuration after precedence resolution.

    Built by :func:`~acfkey.config.resolve_settings` from CLI flags,
    ``ACFKEY_*`` environment variables, ``./acfkey.json`` and defaults.
    The license-key variable name, query parameter and download endpoint
    are fixed constants and deliberately not configurable here.
    """

    env_file: str = Field(
        default=".env", description="Dot-file searched by the dotenv provider"
    )
    providers: list[str] = Field(
        default_factory=lambda: ["env", "dotenv"],
        description="Provider names in precedence order (earlier wins)",
    )
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
