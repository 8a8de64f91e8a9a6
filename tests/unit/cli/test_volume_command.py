"""Unit tests for the volume CLI commands."""

from unittest.mock import patch

from apfscopy.cli.main import app
from apfscopy.core.errors import MountError
from typer.testing import CliRunner

runner = CliRunner()


class TestVolumeCommands:
    """Tests for apfscopy volume mount/unmount/remount."""

    def test_mount(self) -> None:
        """mount reports the number of attempts."""
        with patch("apfscopy.cli.commands.volume.get_controller") as mock_get:
            mock_get.return_value.mount.return_value = 3
            result = runner.invoke(app, ["--no-log-file", "volume", "mount", "/dev/sdb2", "/mnt/a"])

        assert result.exit_code == 0
        mock_get.return_value.mount.assert_called_once_with("/dev/sdb2", "/mnt/a")
        assert "3 attempt(s)" in result.stdout

    def test_mount_error(self) -> None:
        """mount exits 1 when the driver cannot be executed."""
        with patch("apfscopy.cli.commands.volume.get_controller") as mock_get:
            mock_get.return_value.mount.side_effect = MountError("Failed to execute mount")
            result = runner.invoke(app, ["--no-log-file", "volume", "mount", "/dev/sdb2", "/mnt/a"])

        assert result.exit_code == 1
        assert "Failed to execute mount" in result.output

    def test_unmount_success(self) -> None:
        """unmount succeeds when the program succeeds."""
        with patch("apfscopy.cli.commands.volume.get_controller") as mock_get:
            mock_get.return_value.unmount.return_value = True
            result = runner.invoke(app, ["--no-log-file", "volume", "unmount", "/mnt/a"])

        assert result.exit_code == 0
        assert "Unmounted /mnt/a" in result.stdout

    def test_unmount_failure(self) -> None:
        """unmount exits 1 when the program fails."""
        with patch("apfscopy.cli.commands.volume.get_controller") as mock_get:
            mock_get.return_value.unmount.return_value = False
            result = runner.invoke(app, ["--no-log-file", "volume", "unmount", "/mnt/a"])

        assert result.exit_code == 1
        assert "Could not unmount" in result.output

    def test_remount(self) -> None:
        """remount unmounts, then mounts."""
        with patch("apfscopy.cli.commands.volume.get_controller") as mock_get:
            controller = mock_get.return_value
            controller.mount.return_value = 1
            result = runner.invoke(
                app, ["--no-log-file", "volume", "remount", "/dev/sdb2", "/mnt/a"]
            )

        assert result.exit_code == 0
        controller.unmount.assert_called_once_with("/mnt/a")
        controller.mount.assert_called_once_with("/dev/sdb2", "/mnt/a")
