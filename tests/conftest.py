"""Shared test fixtures for acfkey.

Every test runs in its own temporary working directory with the license-key
variable and all ``ACFKEY_*`` overrides removed from the environment, so no
test can pick up a real key from the developer's shell or project.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from acfkey.models import FetchConfig
from acfkey.output import reset_output
from acfkey.providers.base import LICENSE_KEY_VARIABLE

ACF_URL = "https://connect.advancedcustomfields.com/index.php?p=pro&a=download"


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_key_sources(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Clear key-related environment variables and chdir into tmp_path."""
    for var in [LICENSE_KEY_VARIABLE, "ACFKEY_ENV_FILE", "ACFKEY_PROVIDERS"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> Iterator[None]:
    """Reset the global OutputManager so stale CliRunner streams are dropped."""
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Key sources
# ---------------------------------------------------------------------------


@pytest.fixture
def write_dotenv(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a dot-file into the working directory.

    Usage::

        write_dotenv("ACF_PRO_KEY=abc")
        write_dotenv("ACF_PRO_KEY=abc", name="custom.env")
    """

    def _write(content: str, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def env_key(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Return a helper that exports ACF_PRO_KEY for the duration of the test."""

    def _set(value: str) -> None:
        monkeypatch.setenv(LICENSE_KEY_VARIABLE, value)

    return _set


# ---------------------------------------------------------------------------
# Request fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fetch_config() -> FetchConfig:
    """A host fetch configuration with non-default transport settings."""
    return FetchConfig(
        url=ACF_URL,
        options={"options": "array", "http": {"timeout": 30, "header": ["X-A: 1"]}},
        tls_disabled=True,
    )


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
