"""System utilities implementing the image tool interfaces."""

from filevol_plugin.infra.commands import run_command
from filevol_plugin.infra.interfaces import ImageAllocator, ImageFormatter, LoopMounter

# Block size used for image allocation; image sizes are counted in these
BLOCK_SIZE = 512


class SystemImageTools(ImageAllocator, ImageFormatter, LoopMounter):
    """Image tools backed by coreutils, e2fsprogs-style mkfs and util-linux."""

    def allocate(self, path: str, size: str) -> None:
        # count=0 with seek writes no data, leaving the whole file a hole
        run_command(
            ["dd", "if=/dev/zero", f"of={path}", f"bs={BLOCK_SIZE}", "count=0", f"seek={size}"],
            "allocate",
        )

    def copy(self, source: str, target: str) -> None:
        run_command(["cp", "--sparse=always", "-p", "-n", source, target], "copy")

    def delete(self, path: str) -> None:
        run_command(["rm", "-f", path], "delete")

    def format(self, path: str, fstype: str) -> None:
        run_command(["mkfs", "-t", fstype, "-F", path], "format")

    def mount(self, image: str, mountpoint: str, fstype: str) -> None:
        run_command(["mount", "-o", "loop", "-t", fstype, image, mountpoint], "mount")

    def unmount(self, mountpoint: str) -> None:
        run_command(["umount", mountpoint], "unmount")
