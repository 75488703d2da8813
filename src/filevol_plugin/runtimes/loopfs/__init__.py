"""Loop-mounted file volume runtime."""

import logging
import os

from filevol_plugin.config import PluginConfig, get_plugin_config
from filevol_plugin.infra import SystemImageTools
from filevol_plugin.logging_schema import LogEvent
from filevol_plugin.runtimes.loopfs.lock import RWLock
from filevol_plugin.runtimes.loopfs.naming import VolumeNaming
from filevol_plugin.runtimes.loopfs.volume import (
    MOUNTPOINT_MODE,
    Capabilities,
    Volume,
    VolumeManager,
)

logger = logging.getLogger(__name__)


class LoopfsRuntime:
    """Volume runtime wiring configuration, naming and system tools."""

    def __init__(
        self,
        config: PluginConfig | None = None,
        tools: SystemImageTools | None = None,
    ) -> None:
        self._config = config or get_plugin_config()
        self._naming = VolumeNaming.from_config(self._config.volume)

        tools = tools or SystemImageTools()
        self.volumes = VolumeManager(
            self._config.volume,
            self._naming,
            allocator=tools,
            formatter=tools,
            mounter=tools,
        )

    @property
    def naming(self) -> VolumeNaming:
        return self._naming

    def init(self) -> None:
        """Create the mount home directory if it is missing."""
        mount_home = self._naming.mount_home
        if os.path.isdir(mount_home):
            return
        os.makedirs(mount_home, mode=MOUNTPOINT_MODE, exist_ok=True)
        logger.debug(
            "Created mount home at %s",
            mount_home,
            extra={"event": LogEvent.MOUNT_HOME_CREATED, "mount_home": mount_home},
        )


__all__ = [
    "LoopfsRuntime",
    "VolumeManager",
    "VolumeNaming",
    "Volume",
    "Capabilities",
    "RWLock",
]
