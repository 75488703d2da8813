"""Error handling module for filevol_plugin.

This module defines error codes and exception classes raised by the volume
runtime and translated into plugin protocol responses by the API layer.

Docker expects every failure as HTTP 500 with a body of the form:
{
    "Err": "volume data already exists"
}
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from filevol_plugin.runtimes.loopfs.volume import Volume


class ErrorCode(str, Enum):
    """Error codes for the plugin."""

    INVALID_NAME = "INVALID_NAME"
    VOLUME_EXISTS = "VOLUME_EXISTS"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    VOLUME_NOT_FOUND = "VOLUME_NOT_FOUND"
    TOOL_FAILURE = "TOOL_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Plugin protocol error body."""

    Err: str
    Mountpoint: str | None = None


class PluginError(Exception):
    """Base exception for filevol_plugin.

    All plugin-specific exceptions inherit from this class so the API layer
    can translate them in one place.

    Attributes:
        code: The error code from ErrorCode enum.
        message: Human-readable error message.
        status_code: HTTP status code to return.
    """

    def __init__(self, code: ErrorCode, message: str, status_code: int = 500) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse model."""
        return ErrorResponse(Err=self.message)


class InvalidVolumeNameError(PluginError):
    """Volume name cannot be mapped to its own image and mount path."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(ErrorCode.INVALID_NAME, f"invalid volume name {name!r}")


class VolumeExistsError(PluginError):
    """Create target already has an image file."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(ErrorCode.VOLUME_EXISTS, f"volume {name} already exists")


class SourceNotFoundError(PluginError):
    """Snapshot source has no image file."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(ErrorCode.SOURCE_NOT_FOUND, f"source volume {source} not found")


class VolumeNotFoundError(PluginError):
    """Volume has no image file.

    Carries the computed volume descriptor, since callers still get the
    mount path the volume would have.
    """

    def __init__(self, volume: Volume) -> None:
        self.volume = volume
        super().__init__(ErrorCode.VOLUME_NOT_FOUND, f"volume {volume.name} not found")


class ToolFailureError(PluginError):
    """An external utility exited non-zero.

    The message carries the command's combined output verbatim; the core
    does not classify tool errors any further.
    """

    def __init__(
        self,
        cmd: Sequence[str],
        rc: int,
        output: str,
        mountpoint: str | None = None,
    ) -> None:
        self.cmd = list(cmd)
        self.rc = rc
        self.output = output
        self.mountpoint = mountpoint
        message = f"{' '.join(self.cmd)} failed with exit status {rc}"
        if output.strip():
            message = f"{message}: {output.strip()}"
        super().__init__(ErrorCode.TOOL_FAILURE, message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(Err=self.message, Mountpoint=self.mountpoint)


class MountpointError(PluginError):
    """Mount point directory could not be created."""

    def __init__(self, mountpoint: str, reason: str) -> None:
        self.mountpoint = mountpoint
        super().__init__(
            ErrorCode.INTERNAL_ERROR,
            f"cannot create mount point {mountpoint}: {reason}",
        )
