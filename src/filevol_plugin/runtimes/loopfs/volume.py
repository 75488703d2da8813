"""Loop-mounted file volume manager.

The filesystem is the only registry: a volume exists iff its image file
exists, and mount state lives in the kernel. Nothing about volumes is
cached in memory.

Lock discipline (one lock for the whole manager):
- create, remove, mount, unmount: exclusive
- get, list: shared
- path, capabilities: none
"""

from __future__ import annotations

import glob
import logging
import os
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

from filevol_plugin.api.errors import (
    MountpointError,
    SourceNotFoundError,
    ToolFailureError,
    VolumeExistsError,
    VolumeNotFoundError,
)
from filevol_plugin.infra import SystemImageTools
from filevol_plugin.logging_schema import LogEvent
from filevol_plugin.metrics import PLUGIN_VOLUMES_TOTAL
from filevol_plugin.runtimes.loopfs.lock import RWLock

if TYPE_CHECKING:
    from collections.abc import Mapping

    from filevol_plugin.config import VolumeConfig
    from filevol_plugin.infra import ImageAllocator, ImageFormatter, LoopMounter
    from filevol_plugin.runtimes.loopfs.naming import VolumeNaming

logger = logging.getLogger(__name__)

MOUNTPOINT_MODE = 0o700


class Volume(BaseModel):
    name: str
    mountpoint: str


class Capabilities(BaseModel):
    scope: Literal["local", "global"] = "local"


class VolumeManager:
    """File-backed volume manager."""

    def __init__(
        self,
        config: VolumeConfig,
        naming: VolumeNaming,
        allocator: ImageAllocator | None = None,
        formatter: ImageFormatter | None = None,
        mounter: LoopMounter | None = None,
    ) -> None:
        tools = SystemImageTools()
        self._default_size = config.size
        self._fstype = config.fstype
        self._naming = naming
        self._allocator = allocator or tools
        self._formatter = formatter or tools
        self._mounter = mounter or tools
        self._lock = RWLock()

    @property
    def fstype(self) -> str:
        return self._fstype

    def _volume(self, name: str) -> Volume:
        return Volume(name=name, mountpoint=self._naming.mount_path(name))

    def create(self, name: str, options: Mapping[str, str] | None = None) -> None:
        """Create the image file for a volume.

        Options:
        - source: copy the named volume's image instead of allocating
        - size: image size in 512-byte blocks (ignored with source)

        Raises:
            VolumeExistsError: The volume already has an image.
            SourceNotFoundError: The source volume has no image.
            ToolFailureError: Copy, allocation or formatting failed.
        """
        opts = dict(options or {})

        with self._lock.exclusive():
            image = self._naming.image_path(name)

            if os.path.exists(image):
                logger.warning(
                    "Create: target volume exists",
                    extra={
                        "event": LogEvent.VOLUME_CREATE_REJECTED,
                        "volume": name,
                        "image": image,
                    },
                )
                raise VolumeExistsError(name)

            source = opts.get("source")
            if source:
                self._create_snapshot(name, source, image)
                return

            size = opts.get("size") or self._default_size
            self._allocator.allocate(image, size)
            try:
                self._formatter.format(image, self._fstype)
            except ToolFailureError:
                self._discard_image(name, image)
                raise

            logger.info(
                "Volume created",
                extra={
                    "event": LogEvent.VOLUME_CREATED,
                    "volume": name,
                    "image": image,
                    "size": size,
                    "fstype": self._fstype,
                },
            )

    def _create_snapshot(self, name: str, source: str, image: str) -> None:
        source_image = self._naming.image_path(source)
        if not os.path.exists(source_image):
            logger.warning(
                "Create: snapshot source not found",
                extra={
                    "event": LogEvent.VOLUME_CREATE_REJECTED,
                    "volume": name,
                    "source": source,
                },
            )
            raise SourceNotFoundError(source)

        self._allocator.copy(source_image, image)
        logger.info(
            "Volume snapshot created",
            extra={
                "event": LogEvent.VOLUME_SNAPSHOT_CREATED,
                "volume": name,
                "source": source,
                "image": image,
            },
        )

    def _discard_image(self, name: str, image: str) -> None:
        """Delete an image left unformatted by a failed create."""
        try:
            self._allocator.delete(image)
        except ToolFailureError:
            # The format error is what the caller needs to see
            logger.error(
                "Create: failed to remove unformatted image",
                extra={"event": LogEvent.VOLUME_CLEANUP, "volume": name, "image": image},
            )
            return
        logger.info(
            "Removed unformatted image",
            extra={"event": LogEvent.VOLUME_CLEANUP, "volume": name, "image": image},
        )

    def remove(self, name: str) -> None:
        """Delete a volume's image file.

        Removing a volume without an image succeeds. The volume is not
        unmounted first; that is the caller's job.

        Raises:
            ToolFailureError: The delete tool failed; the image may remain.
        """
        with self._lock.exclusive():
            image = self._naming.image_path(name)
            if not os.path.exists(image):
                logger.debug("Remove: %s has no image, nothing to do", name)
                return

            self._allocator.delete(image)
            logger.info(
                "Volume removed",
                extra={"event": LogEvent.VOLUME_REMOVED, "volume": name, "image": image},
            )

    def mount(self, name: str) -> str:
        """Loop-mount a volume's image onto its mount path.

        Returns:
            The mount path.

        Raises:
            MountpointError: The mount path could not be created.
            ToolFailureError: mount failed; its mountpoint attribute still
                carries the intended mount path.
        """
        with self._lock.exclusive():
            mountpoint = self._naming.mount_path(name)
            image = self._naming.image_path(name)

            try:
                os.makedirs(mountpoint, mode=MOUNTPOINT_MODE, exist_ok=True)
            except OSError as e:
                logger.error(
                    "Mount: mkdir error: %s",
                    e,
                    extra={"event": LogEvent.TOOL_FAILED, "volume": name, "mountpoint": mountpoint},
                )
                raise MountpointError(mountpoint, str(e)) from e

            try:
                self._mounter.mount(image, mountpoint, self._fstype)
            except ToolFailureError as e:
                e.mountpoint = mountpoint
                raise

            logger.info(
                "Volume mounted",
                extra={
                    "event": LogEvent.VOLUME_MOUNTED,
                    "volume": name,
                    "image": image,
                    "mountpoint": mountpoint,
                },
            )
            return mountpoint

    def unmount(self, name: str) -> None:
        """Unmount a volume's mount path.

        Raises:
            ToolFailureError: umount failed (including "not mounted").
        """
        with self._lock.exclusive():
            mountpoint = self._naming.mount_path(name)
            self._mounter.unmount(mountpoint)
            logger.info(
                "Volume unmounted",
                extra={"event": LogEvent.VOLUME_UNMOUNTED, "volume": name, "mountpoint": mountpoint},
            )

    def get(self, name: str) -> Volume:
        """Describe a volume.

        The mount path is computed, not checked against the mount table.

        Raises:
            VolumeNotFoundError: No image; the error carries the descriptor.
        """
        with self._lock.shared():
            volume = self._volume(name)
            if not os.path.exists(self._naming.image_path(name)):
                raise VolumeNotFoundError(volume)
            return volume

    def list(self) -> list[Volume]:
        """List every volume with an image in the volume directory.

        Order follows directory enumeration and is not stable.
        """
        with self._lock.shared():
            images = glob.glob(self._naming.image_glob())
            volumes = [self._volume(self._naming.name_from_image(image)) for image in images]

        PLUGIN_VOLUMES_TOTAL.set(len(volumes))
        return volumes

    def path(self, name: str) -> str:
        return self._naming.mount_path(name)

    def capabilities(self) -> Capabilities:
        return Capabilities(scope="local")
