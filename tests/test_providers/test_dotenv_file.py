"""Tests for the ``.env`` file key provider and its parsing conventions."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from acfkey.providers.dotenv_file import DotenvKeyProvider


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class TestDotenvLookup:
    def test_name(self) -> None:
        assert DotenvKeyProvider().name == "dotenv"

    def test_default_path_is_dot_env(self) -> None:
        assert DotenvKeyProvider().path == Path(".env")

    def test_reads_key_from_dot_env(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY=DOT_ENV_KEY")
        assert DotenvKeyProvider().resolve() == "DOT_ENV_KEY"

    @pytest.mark.parametrize("value", ["k", "ABC123", "with spaces", "a=b", "abc#def", "ünïcødé"])
    def test_returns_value_verbatim(self, write_dotenv, value: str) -> None:
        write_dotenv(f"ACF_PRO_KEY={value}\n")
        assert DotenvKeyProvider().resolve() == value

    def test_missing_file_is_not_found(self) -> None:
        assert DotenvKeyProvider().resolve() is None

    def test_directory_is_not_found(self, tmp_path: Path) -> None:
        (tmp_path / ".env").mkdir()
        assert DotenvKeyProvider().resolve() is None

    def test_file_without_key_is_not_found(self, write_dotenv) -> None:
        write_dotenv("OTHER=value\nWP_ENV=production\n")
        assert DotenvKeyProvider().resolve() is None

    def test_empty_value_is_not_found(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY=\n")
        assert DotenvKeyProvider().resolve() is None

    def test_name_without_value_is_not_found(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY\n")
        assert DotenvKeyProvider().resolve() is None

    def test_custom_path(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY=from-custom", name="custom.env")
        assert DotenvKeyProvider("custom.env").resolve() == "from-custom"
        assert DotenvKeyProvider().resolve() is None

    def test_absolute_path(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "keys.env"
        path.parent.mkdir()
        path.write_text("ACF_PRO_KEY=absolute\n", encoding="utf-8")
        assert DotenvKeyProvider(path).resolve() == "absolute"

    def test_relative_path_follows_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        provider = DotenvKeyProvider()
        other = tmp_path / "project"
        other.mkdir()
        (other / ".env").write_text("ACF_PRO_KEY=project-key\n", encoding="utf-8")

        assert provider.resolve() is None
        monkeypatch.chdir(other)
        assert provider.resolve() == "project-key"

    def test_does_not_load_into_environment(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY=DOT_ENV_KEY\nOTHER=1\n")
        DotenvKeyProvider().resolve()
        assert "ACF_PRO_KEY" not in os.environ
        assert "OTHER" not in os.environ

    def test_does_not_modify_file(self, write_dotenv) -> None:
        path = write_dotenv("ACF_PRO_KEY=DOT_ENV_KEY\n")
        before = path.read_bytes()
        DotenvKeyProvider().resolve()
        assert path.read_bytes() == before


# ---------------------------------------------------------------------------
# Parsing conventions
# ---------------------------------------------------------------------------


class TestDotenvParsing:
    def test_double_quotes_are_stripped(self, write_dotenv) -> None:
        write_dotenv('ACF_PRO_KEY="quoted-key"\n')
        assert DotenvKeyProvider().resolve() == "quoted-key"

    def test_single_quotes_are_stripped(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY='single-quoted'\n")
        assert DotenvKeyProvider().resolve() == "single-quoted"

    def test_equals_inside_value_is_kept(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY=abc=def==\n")
        assert DotenvKeyProvider().resolve() == "abc=def=="

    def test_export_prefix_is_accepted(self, write_dotenv) -> None:
        write_dotenv("export ACF_PRO_KEY=exported\n")
        assert DotenvKeyProvider().resolve() == "exported"

    def test_comments_and_blank_lines_are_ignored(self, write_dotenv) -> None:
        write_dotenv(
            "# ACF_PRO_KEY=commented-out\n"
            "\n"
            "   \n"
            "WP_ENV=development\n"
            "ACF_PRO_KEY=real-key\n"
        )
        assert DotenvKeyProvider().resolve() == "real-key"

    def test_commented_key_alone_is_not_found(self, write_dotenv) -> None:
        write_dotenv("# ACF_PRO_KEY=commented-out\n")
        assert DotenvKeyProvider().resolve() is None

    def test_trailing_comment_on_unquoted_value_is_removed(self, write_dotenv) -> None:
        write_dotenv("ACF_PRO_KEY=real-key # purchased 2024\n")
        assert DotenvKeyProvider().resolve() == "real-key"

    def test_variable_references_are_not_interpolated(self, write_dotenv) -> None:
        write_dotenv("PREFIX=abc\nACF_PRO_KEY=${PREFIX}-123\n")
        assert DotenvKeyProvider().resolve() == "${PREFIX}-123"

    def test_malformed_lines_do_not_block_later_key(self, write_dotenv) -> None:
        write_dotenv(
            "this line is not an assignment\n"
            "=no-name\n"
            "ACF_PRO_KEY=after-garbage\n"
        )
        assert DotenvKeyProvider().resolve() == "after-garbage"

    def test_windows_line_endings(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_bytes(b"WP_ENV=dev\r\nACF_PRO_KEY=crlf-key\r\n")
        assert DotenvKeyProvider().resolve() == "crlf-key"


# ---------------------------------------------------------------------------
# Unreadable files
# ---------------------------------------------------------------------------


class TestDotenvUnreadable:
    def test_permission_error_is_not_found(
        self, write_dotenv, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_dotenv("ACF_PRO_KEY=hidden\n")

        def _deny(*args, **kwargs):
            raise PermissionError("permission denied")

        monkeypatch.setattr("acfkey.providers.dotenv_file.dotenv_values", _deny)
        assert DotenvKeyProvider().resolve() is None

    def test_file_removed_before_read_is_not_found(
        self, write_dotenv, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = write_dotenv("ACF_PRO_KEY=gone\n")

        def _vanish(*args, **kwargs):
            path.unlink()
            raise FileNotFoundError(str(path))

        monkeypatch.setattr("acfkey.providers.dotenv_file.dotenv_values", _vanish)
        assert DotenvKeyProvider().resolve() is None

    def test_undecodable_file_is_not_found(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_bytes(b"ACF_PRO_KEY=\xff\xfe\xfa\n")
        assert DotenvKeyProvider().resolve() is None
