"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for the plugin.

    Used with logger.info/warning/error extra dict:
        logger.info("message", extra={"event": LogEvent.VOLUME_CREATED, ...})
    """

    # Application lifecycle
    APP_STARTED = "app_started"
    APP_STOPPED = "app_stopped"
    MOUNT_HOME_CREATED = "mount_home_created"

    # Volume events
    VOLUME_CREATED = "volume_created"
    VOLUME_SNAPSHOT_CREATED = "volume_snapshot_created"
    VOLUME_CREATE_REJECTED = "volume_create_rejected"
    VOLUME_REMOVED = "volume_removed"
    VOLUME_MOUNTED = "volume_mounted"
    VOLUME_UNMOUNTED = "volume_unmounted"
    VOLUME_CLEANUP = "volume_cleanup"

    # External tool events
    TOOL_FAILED = "tool_failed"

    # Error events
    UNHANDLED_EXCEPTION = "unhandled_exception"
    PLUGIN_ERROR = "plugin_error"
