"""Capability interfaces for the external tools behind volume images.

The volume runtime only talks to these interfaces, so lifecycle logic can
be exercised with fakes that record calls instead of shelling out.

Implementations:
- SystemImageTools: dd, mkfs, cp, mount, umount, rm
"""

from abc import ABC, abstractmethod


class ImageAllocator(ABC):
    """Creates, copies and deletes image files."""

    @abstractmethod
    def allocate(self, path: str, size: str) -> None:
        """Allocate a sparse, zero-filled image file.

        Args:
            path: Image file to create
            size: Logical size in 512-byte blocks
        """
        ...

    @abstractmethod
    def copy(self, source: str, target: str) -> None:
        """Copy an image file, preserving holes.

        Args:
            source: Existing image file
            target: Image file to create
        """
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete an image file."""
        ...


class ImageFormatter(ABC):
    """Creates a filesystem inside an image file."""

    @abstractmethod
    def format(self, path: str, fstype: str) -> None:
        """Format an image file.

        Args:
            path: Image file to format
            fstype: Filesystem type (ext4, xfs, ...)
        """
        ...


class LoopMounter(ABC):
    """Attaches image files through a loop device."""

    @abstractmethod
    def mount(self, image: str, mountpoint: str, fstype: str) -> None:
        """Loop-mount an image file onto a directory."""
        ...

    @abstractmethod
    def unmount(self, mountpoint: str) -> None:
        """Unmount a directory."""
        ...
