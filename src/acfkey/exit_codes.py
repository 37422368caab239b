"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~acfkey.exceptions.AcfKeyError` subclass. CI scripts
can inspect the exit code of ``acfkey resolve`` to tell a missing key apart
from a broken configuration without parsing stderr.

Example::

    $ acfkey resolve
    $ echo $?
    3   # EXIT_MISSING_KEY -- no source provided ACF_PRO_KEY
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_MISSING_KEY = 3
"""No configured source provided the license key."""

EXIT_PLUGIN_ERROR = 10
"""A provider plugin failed to register or load."""
