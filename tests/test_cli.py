"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from docso.cli import _setup_logging, app


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("docso.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("docso.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestDocCommand:
    """Tests for the doc command."""

    def test_help_without_arguments(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["doc", "--index-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "Docs help!" in result.stdout

    def test_package_summary(
        self,
        tmp_path: Path,
        write_index: Callable[[str, dict[str, Any]], Path],
        strings_document: dict[str, Any],
    ) -> None:
        write_index("strings", strings_document)
        result = runner.invoke(app, ["doc", "strings", "--index-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "Info for strings" in result.stdout
        assert "Functions: 2" in result.stdout

    def test_method_lookup(
        self,
        tmp_path: Path,
        write_index: Callable[[str, dict[str, Any]], Path],
        strings_document: dict[str, Any],
    ) -> None:
        write_index("strings", strings_document)
        result = runner.invoke(
            app, ["doc", "strings", "builder.writestring", "--index-dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert "func(Builder) WriteString" in result.stdout

    def test_missing_index_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["doc", "strings", "--index-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_too_many_arguments(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["doc", "a", "b", "c", "--index-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "Too many arguments." in result.stdout


class TestListCommand:
    """Tests for the list command."""

    def test_list_functions(
        self,
        tmp_path: Path,
        write_index: Callable[[str, dict[str, Any]], Path],
        strings_document: dict[str, Any],
    ) -> None:
        write_index("strings", strings_document)
        result = runner.invoke(app, ["list", "strings", "--index-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "Page 1/1" in result.stdout
        assert "Contains" in result.stdout

    def test_list_types_clamps_page(
        self,
        tmp_path: Path,
        write_index: Callable[[str, dict[str, Any]], Path],
        strings_document: dict[str, Any],
    ) -> None:
        write_index("strings", strings_document)
        result = runner.invoke(
            app, ["list", "strings", "--kind", "types", "--page", "7", "--index-dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        assert "Page 1/1" in result.stdout
        assert "Builder" in result.stdout

    def test_list_missing_package(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["list", "nothing", "--index-dir", str(tmp_path)])
        assert result.exit_code == 1


class TestWebCommand:
    """Tests for the web command."""

    @patch("uvicorn.run")
    def test_web_starts_server(self, mock_run: MagicMock, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["web", "--port", "9000", "--index-dir", str(tmp_path)]
        )
        assert result.exit_code == 0
        mock_run.assert_called_once()
        assert mock_run.call_args[1]["port"] == 9000

    @patch("uvicorn.run")
    def test_web_warns_about_missing_index(self, mock_run: MagicMock, tmp_path: Path) -> None:
        result = runner.invoke(app, ["web", "--index-dir", str(tmp_path / "missing")])
        assert result.exit_code == 0
        assert "index directory not found" in result.stdout
