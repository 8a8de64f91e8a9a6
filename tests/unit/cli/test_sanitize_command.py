"""Unit tests for the sanitize CLI command."""

from apfscopy.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestSanitizeCommand:
    """Tests for apfscopy sanitize."""

    def test_sanitize_names(self) -> None:
        """Each name is shown with its destination form."""
        result = runner.invoke(app, ["--no-log-file", "sanitize", "a:b", "ok.txt"])

        assert result.exit_code == 0
        assert "a_b" in result.stdout
        assert "ok.txt" in result.stdout

    def test_requires_names(self) -> None:
        """At least one name is required."""
        result = runner.invoke(app, ["--no-log-file", "sanitize"])

        assert result.exit_code != 0


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "apfscopy version" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without arguments shows help."""
        result = runner.invoke(app, [])

        assert "copy" in result.output
