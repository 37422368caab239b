"""Typer application and CLI entry point for acfkey.

The CLI is an operator aid around the same code path the host tool uses at
pre-download time. It lets you check which source supplies the license key,
list the configured sources in precedence order, and print the key-augmented
download URL for use with ``curl`` or ``wget``.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from acfkey import __version__
from acfkey.exceptions import AcfKeyError, InvalidUsageError
from acfkey.exit_codes import EXIT_GENERIC_FAILURE
from acfkey.matcher import ACF_PRO_DOWNLOAD_URL

if TYPE_CHECKING:
    from acfkey.providers.chain import ProviderChain

app = typer.Typer(
    name="acfkey",
    help="Resolve the ACF PRO license key and build authenticated download URLs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"acfkey {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route ``acfkey`` log records to stderr through Rich when verbose."""
    logger = logging.getLogger("acfkey")
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    env_file: Optional[str] = typer.Option(
        None, "--env-file", help="Dot-file to search for ACF_PRO_KEY."
    ),
    provider: Optional[list[str]] = typer.Option(
        None,
        "--provider",
        help="Key provider to use, in precedence order. Repeatable.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~acfkey.output.OutputManager` and stores
    the settings overrides in ``ctx.obj`` for the sub-commands.
    """
    from acfkey.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    ctx.obj["providers"] = provider or None


def _build_chain(ctx: typer.Context) -> ProviderChain:
    """Resolve settings from the context overrides and build the provider chain."""
    from acfkey.config import resolve_settings
    from acfkey.output import debug
    from acfkey.providers.registry import create_default_registry

    obj = ctx.obj or {}
    settings = resolve_settings(
        cli_env_file=obj.get("env_file"),
        cli_providers=obj.get("providers"),
    )
    if ctx.obj is not None:
        ctx.obj["settings"] = settings
    registry = create_default_registry()
    loaded = registry.discover(settings)
    if loaded:
        debug(f"Provider plugins: {', '.join(loaded)}")
    debug(f"Provider order: {', '.join(settings.providers)}")
    return registry.build_chain(settings)


def _fail(ctx: typer.Context, exc: AcfKeyError) -> typer.Exit:
    from acfkey.exceptions import MissingKeyError
    from acfkey.output import error, suggest

    error(str(exc))
    if isinstance(exc, MissingKeyError):
        settings = (ctx.obj or {}).get("settings")
        env_file = settings.env_file if settings is not None else ".env"
        suggest(f"export {exc.variable_name}=<your license key>, or add it to {env_file}")
    return typer.Exit(code=exc.exit_code)


@app.command("resolve")
def resolve_command(
    ctx: typer.Context,
    show: bool = typer.Option(
        False, "--show", help="Print the full key instead of a masked one."
    ),
) -> None:
    """Resolve the license key and report which source supplied it.

    Example::

        acfkey resolve
        acfkey resolve --show
    """
    from acfkey.output import format_response, info

    try:
        resolved = _build_chain(ctx).lookup()
    except AcfKeyError as exc:
        raise _fail(ctx, exc) from None

    info(f"License key found via '{resolved.source}'")
    key = resolved.key if show else resolved.masked()
    format_response({"source": resolved.source, "key": key}, key)


@app.command("sources")
def sources_command(ctx: typer.Context) -> None:
    """List the configured key sources in precedence order.

    Each source is queried independently, so the table shows every source
    that has a key, not only the one that wins.
    """
    from acfkey.output import print_table

    try:
        chain = _build_chain(ctx)
    except AcfKeyError as exc:
        raise _fail(ctx, exc) from None

    rows = []
    for position, key_provider in enumerate(chain, start=1):
        status = "found" if key_provider.resolve() else "missing"
        rows.append([str(position), key_provider.name, key_provider.description, status])
    print_table(["#", "provider", "source", "status"], rows, title="License key sources")


@app.command("url")
def url_command(
    ctx: typer.Context,
    url: str = typer.Argument(
        ACF_PRO_DOWNLOAD_URL, help="Download URL to augment (must be the ACF PRO endpoint)."
    ),
) -> None:
    """Print the download URL with the license key added.

    Example::

        curl -o acf-pro.zip "$(acfkey url)"
    """
    from acfkey.handler import LicenseKeyInjector
    from acfkey.models import FetchConfig
    from acfkey.output import format_response

    try:
        injector = LicenseKeyInjector(_build_chain(ctx))
        replacement = injector.handle(url, FetchConfig(url=url))
        if replacement is None:
            raise InvalidUsageError(
                f"Refusing to add the license key to {url}: "
                f"not the ACF PRO download endpoint ({ACF_PRO_DOWNLOAD_URL})"
            )
    except AcfKeyError as exc:
        raise _fail(ctx, exc) from None

    format_response({"url": replacement.url}, replacement.url)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from acfkey.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``acfkey`` console script.

    :class:`~acfkey.exceptions.AcfKeyError` instances cause a clean exit
    with the error's ``exit_code``. All other exceptions produce a crash log
    and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from acfkey.output import error

        if isinstance(exc, AcfKeyError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
