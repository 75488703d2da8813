"""Tests for error handling classes."""

import pytest

from filevol_plugin.api.errors import (
    ErrorCode,
    InvalidVolumeNameError,
    MountpointError,
    PluginError,
    SourceNotFoundError,
    ToolFailureError,
    VolumeExistsError,
    VolumeNotFoundError,
)
from filevol_plugin.runtimes.loopfs.volume import Volume


class TestToolFailureError:
    """Tests for ToolFailureError."""

    def test_message_includes_command_status_and_output(self) -> None:
        exc = ToolFailureError(["mkfs", "-t", "ext4", "/x.img"], 1, "mkfs: bad size\n")

        assert exc.message == "mkfs -t ext4 /x.img failed with exit status 1: mkfs: bad size"
        assert exc.code == ErrorCode.TOOL_FAILURE
        assert exc.status_code == 500

    def test_message_without_output(self) -> None:
        exc = ToolFailureError(["umount", "/mnt/a"], 32, "")

        assert exc.message == "umount /mnt/a failed with exit status 32"

    def test_response_omits_mountpoint_by_default(self) -> None:
        resp = ToolFailureError(["rm"], 1, "")

        assert resp.to_response().model_dump(exclude_none=True) == {
            "Err": "rm failed with exit status 1"
        }

    def test_response_carries_mountpoint(self) -> None:
        exc = ToolFailureError(["mount"], 32, "busy", mountpoint="/mnt/a")

        assert exc.to_response().model_dump(exclude_none=True) == {
            "Err": "mount failed with exit status 32: busy",
            "Mountpoint": "/mnt/a",
        }


class TestOtherErrors:
    """Tests for error classes to ensure consistency."""

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (InvalidVolumeNameError(""), ErrorCode.INVALID_NAME),
            (VolumeExistsError("a"), ErrorCode.VOLUME_EXISTS),
            (SourceNotFoundError("a"), ErrorCode.SOURCE_NOT_FOUND),
            (VolumeNotFoundError(Volume(name="a", mountpoint="/mnt/a")), ErrorCode.VOLUME_NOT_FOUND),
            (MountpointError("/mnt/a", "Permission denied"), ErrorCode.INTERNAL_ERROR),
        ],
    )
    def test_inherits_plugin_error(self, exc: PluginError, code: ErrorCode) -> None:
        assert isinstance(exc, PluginError)
        assert exc.code == code
        assert exc.status_code == 500
        assert exc.to_response().Err == exc.message

    def test_volume_not_found_keeps_descriptor(self) -> None:
        volume = Volume(name="a", mountpoint="/mnt/a")

        exc = VolumeNotFoundError(volume)

        assert exc.volume is volume
        assert exc.message == "volume a not found"
