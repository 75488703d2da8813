"""Path conventions for file-backed volumes."""

import os

from filevol_plugin.api.errors import InvalidVolumeNameError
from filevol_plugin.config import VolumeConfig

IMAGE_SUFFIX = ".img"


class VolumeNaming:
    """Centralized name <-> path derivations.

    All methods are pure: they never touch the filesystem.
    """

    def __init__(self, volume_dir: str, mount_home: str) -> None:
        self._volume_dir = volume_dir
        self._mount_home = mount_home

    @classmethod
    def from_config(cls, config: VolumeConfig) -> "VolumeNaming":
        return cls(config.path, config.mount_home)

    @property
    def volume_dir(self) -> str:
        return self._volume_dir

    @property
    def mount_home(self) -> str:
        return self._mount_home

    @staticmethod
    def _checked(name: str) -> str:
        # Empty, dot and slashed names would resolve outside their own entry
        if name in ("", ".", "..") or os.sep in name:
            raise InvalidVolumeNameError(name)
        return name

    def image_path(self, name: str) -> str:
        return os.path.join(self._volume_dir, self._checked(name)) + IMAGE_SUFFIX

    def mount_path(self, name: str) -> str:
        return os.path.join(self._mount_home, self._checked(name))

    def image_glob(self) -> str:
        return os.path.join(self._volume_dir, "*" + IMAGE_SUFFIX)

    def name_from_image(self, image_path: str) -> str:
        base = os.path.basename(image_path)
        if base.endswith(IMAGE_SUFFIX):
            return base[: -len(IMAGE_SUFFIX)]
        return base
