"""Volume commands: mount, unmount and remount the source volume.

These are the same operations the copy engine uses for recovery, exposed
for preparing a session by hand.
"""

from typing import Annotated

import typer

from apfscopy.cli.types import get_settings
from apfscopy.core.errors import MountError
from apfscopy.mount import get_controller
from apfscopy.utils.formatting import print_error, print_success, print_warning

app = typer.Typer(
    help="Mount, unmount or remount the source volume.",
    no_args_is_help=True,
)

DeviceArg = Annotated[str, typer.Argument(help="Device holding the APFS volume.")]
MountPointArg = Annotated[str, typer.Argument(help="Mount point directory.")]


@app.command()
def mount(ctx: typer.Context, device: DeviceArg, mount_point: MountPointArg) -> None:
    """Mount the volume, retrying until the driver succeeds."""
    controller = get_controller(get_settings(ctx))
    try:
        attempts = controller.mount(device, mount_point)
    except MountError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Mounted {device} at {mount_point} after {attempts} attempt(s).")


@app.command()
def unmount(ctx: typer.Context, mount_point: MountPointArg) -> None:
    """Unmount the volume once."""
    controller = get_controller(get_settings(ctx))
    try:
        unmounted = controller.unmount(mount_point)
    except MountError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    if not unmounted:
        print_warning(f"Could not unmount {mount_point}")
        raise typer.Exit(code=1)
    print_success(f"Unmounted {mount_point}.")


@app.command()
def remount(ctx: typer.Context, device: DeviceArg, mount_point: MountPointArg) -> None:
    """Unmount, then mount the volume again."""
    controller = get_controller(get_settings(ctx))
    try:
        controller.unmount(mount_point)
        attempts = controller.mount(device, mount_point)
    except MountError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Remounted {device} at {mount_point} after {attempts} attempt(s).")
