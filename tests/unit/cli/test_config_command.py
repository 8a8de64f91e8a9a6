"""Unit tests for the config CLI commands."""

from pathlib import Path

from apfscopy.cli.main import app
from apfscopy.core.paths import get_settings_path
from apfscopy.core.settings import Settings, load_settings
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigShow:
    """Tests for apfscopy config show."""

    def test_show_defaults(self) -> None:
        """Without a file the defaults are shown."""
        result = runner.invoke(app, ["--no-log-file", "config", "show"])

        assert result.exit_code == 0
        assert "apfs-fuse" in result.stdout
        assert "settle_delay_seconds" in result.stdout
        assert "defaults" in result.stdout

    def test_show_custom_file(self, tmp_path: Path) -> None:
        """A custom settings file is shown."""
        config_file = tmp_path / "c.toml"
        config_file.write_text('mount_program = "apfs-fuse-ng"\n')

        result = runner.invoke(
            app, ["--no-log-file", "--config", str(config_file), "config", "show"]
        )

        assert result.exit_code == 0
        assert "apfs-fuse-ng" in result.stdout


class TestConfigInit:
    """Tests for apfscopy config init."""

    def test_init_writes_defaults(self) -> None:
        """init writes the default settings to the XDG path."""
        result = runner.invoke(app, ["--no-log-file", "config", "init"])

        assert result.exit_code == 0
        assert load_settings(get_settings_path()) == Settings()

    def test_init_refuses_overwrite(self, tmp_path: Path) -> None:
        """init does not overwrite an existing file without --force."""
        config_file = tmp_path / "c.toml"
        config_file.write_text("use_sudo = false\n")

        result = runner.invoke(
            app, ["--no-log-file", "--config", str(config_file), "config", "init"]
        )

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert config_file.read_text() == "use_sudo = false\n"

    def test_init_force(self, tmp_path: Path) -> None:
        """init --force overwrites an existing file."""
        config_file = tmp_path / "c.toml"
        config_file.write_text("use_sudo = false\n")

        result = runner.invoke(
            app, ["--no-log-file", "--config", str(config_file), "config", "init", "--force"]
        )

        assert result.exit_code == 0
        assert load_settings(config_file).use_sudo is True
