"""Plugin configuration using pydantic-settings.

Configuration hierarchy:
- VolumeConfig: Image size, image directory, filesystem, mount home
- LoggingConfig: Logging behavior
- ServerConfig: Plugin socket settings
- PluginConfig: Main config aggregating all sub-configs

Environment variable prefix: FILEVOL_
Example: FILEVOL_VOLUME_FSTYPE=xfs

The operator config file (/etc/docker/filevol-plugin) overrides the volume
settings it names, on top of both defaults and environment variables.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "/etc/docker/filevol-plugin"

# Config file key -> VolumeConfig field
_CONFIG_FILE_KEYS = {
    "size": "size",
    "path": "path",
    "fstyp": "fstype",
}


class VolumeConfig(BaseSettings):
    """Volume provisioning configuration.

    Size is a count of 512-byte blocks, passed through to the allocator
    unchanged.
    """

    model_config = SettingsConfigDict(env_prefix="FILEVOL_VOLUME_")

    size: str = Field(default="208896", description="Default image size (512-byte blocks)")
    path: str = Field(default="/mnt/data/apps", description="Directory holding image files")
    fstype: str = Field(default="ext4", description="Filesystem type for new images")
    mount_home: str = Field(
        default="/var/lib/docker-filevol-plugin",
        description="Directory holding mount points",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Supports both text and JSON formats for different environments:
    - text: Human-readable for local development
    - json: Structured logging for production (log aggregation)
    """

    model_config = SettingsConfigDict(env_prefix="FILEVOL_LOGGING_")

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(
        default="docker-filevol-plugin",
        description="Service identifier in logs",
    )
    syslog_address: str = Field(
        default="",
        description="Syslog socket path or host:port for error logs (empty disables)",
    )


class ServerConfig(BaseSettings):
    """Plugin socket configuration."""

    model_config = SettingsConfigDict(env_prefix="FILEVOL_SERVER_")

    socket_path: str = Field(
        default="/run/docker/plugins/filevol.sock",
        description="Unix socket Docker discovers the plugin on",
    )


class PluginConfig(BaseSettings):
    """Main plugin configuration aggregating all sub-configs.

    Environment variable prefix: FILEVOL_
    Sub-configs use their own prefixes (FILEVOL_VOLUME_, FILEVOL_LOGGING_, ...)
    """

    model_config = SettingsConfigDict(
        env_prefix="FILEVOL_",
        env_nested_delimiter="__",
    )

    config_file: str = Field(
        default=DEFAULT_CONFIG_FILE,
        description="Line-oriented key=value file overriding volume settings",
    )

    # Sub-configurations
    volume: VolumeConfig = Field(default_factory=VolumeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def load_config_file(path: str | os.PathLike) -> dict[str, str]:
    """Read volume overrides from a key=value config file.

    Lines starting with '#' are comments. Recognized keys are size, path
    and fstyp; anything else is ignored. A missing file yields no overrides.

    Args:
        path: Config file location.

    Returns:
        Mapping of VolumeConfig field name to override value.
    """
    file = Path(path)
    if not file.is_file():
        return {}

    overrides: dict[str, str] = {}
    for raw in file.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        field = _CONFIG_FILE_KEYS.get(key.strip())
        if field is None:
            logger.debug("Ignoring unknown config key %r in %s", key.strip(), file)
            continue
        overrides[field] = value.strip()
    return overrides


def build_plugin_config() -> PluginConfig:
    """Build config from defaults, environment and the operator config file."""
    config = PluginConfig()
    overrides = load_config_file(config.config_file)
    if overrides:
        config.volume = config.volume.model_copy(update=overrides)
    return config


@lru_cache
def get_plugin_config() -> PluginConfig:
    """Get cached plugin configuration singleton."""
    return build_plugin_config()
