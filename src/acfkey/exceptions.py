"""Exception hierarchy for acfkey.

All exceptions inherit from :class:`AcfKeyError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`acfkey.exit_codes`.
The CLI entry point in :func:`acfkey.app.main` catches ``AcfKeyError`` and
exits with the appropriate code.

Only :class:`MissingKeyError` ever crosses the boundary from
:class:`~acfkey.handler.LicenseKeyInjector` to the host tool. A provider that
cannot find the key returns ``None`` instead of raising.

Subclass hierarchy::

    AcfKeyError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- MissingKeyError     (exit 3)
    +-- ConfigError         (exit 1)
    +-- PluginError         (exit 10)
"""

from __future__ import annotations

from acfkey.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MISSING_KEY,
    EXIT_PLUGIN_ERROR,
)


class AcfKeyError(Exception):
    """Base exception for all acfkey errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(AcfKeyError):
    """Raised for invalid CLI arguments (e.g. a URL outside the allow-list)."""

    exit_code = EXIT_INVALID_USAGE


class MissingKeyError(AcfKeyError):
    """Raised when no provider in the chain could resolve the license key.

    The variable the operator should set is kept as a field so callers can
    assert on it without matching the message text.

    Args:
        variable_name: The environment variable that holds the key.
        sources: Names of the providers that were tried, in order.
        message: Optional extra detail appended to the standard message.

    Attributes:
        variable_name: See above.
        sources: See above.
    """

    exit_code = EXIT_MISSING_KEY

    def __init__(
        self,
        variable_name: str,
        sources: list[str] | tuple[str, ...] = (),
        message: str = "",
    ):
        self.variable_name = variable_name
        self.sources = tuple(sources)
        text = (
            "Could not find a license key for ACF PRO. "
            f"Set the {variable_name} environment variable"
        )
        if self.sources:
            text += f" (sources tried: {', '.join(self.sources)})"
        text += "."
        if message:
            text += f" {message}"
        super().__init__(text)


class ConfigError(AcfKeyError):
    """Raised for configuration problems (invalid acfkey.json, bad provider list)."""

    exit_code = EXIT_GENERIC_FAILURE


class PluginError(AcfKeyError):
    """Raised when a provider plugin cannot be registered."""

    exit_code = EXIT_PLUGIN_ERROR
