"""Unit tests for SystemImageTools command lines."""

from unittest.mock import MagicMock, patch

import pytest

from filevol_plugin.infra.tools import SystemImageTools


@pytest.fixture
def mock_run() -> MagicMock:
    with patch("filevol_plugin.infra.tools.run_command") as mock:
        mock.return_value = ""
        yield mock


class TestSystemImageTools:
    """Tests that each capability maps to the right utility."""

    def test_allocate_creates_sparse_file(self, mock_run: MagicMock) -> None:
        SystemImageTools().allocate("/images/a.img", "208896")

        mock_run.assert_called_once_with(
            ["dd", "if=/dev/zero", "of=/images/a.img", "bs=512", "count=0", "seek=208896"],
            "allocate",
        )

    def test_copy_preserves_holes(self, mock_run: MagicMock) -> None:
        SystemImageTools().copy("/images/a.img", "/images/b.img")

        cmd, operation = mock_run.call_args[0]
        assert cmd[0] == "cp"
        assert "--sparse=always" in cmd
        assert cmd[-2:] == ["/images/a.img", "/images/b.img"]
        assert operation == "copy"

    def test_delete(self, mock_run: MagicMock) -> None:
        SystemImageTools().delete("/images/a.img")

        mock_run.assert_called_once_with(["rm", "-f", "/images/a.img"], "delete")

    def test_format(self, mock_run: MagicMock) -> None:
        SystemImageTools().format("/images/a.img", "xfs")

        mock_run.assert_called_once_with(["mkfs", "-t", "xfs", "-F", "/images/a.img"], "format")

    def test_mount(self, mock_run: MagicMock) -> None:
        SystemImageTools().mount("/images/a.img", "/mnt/a", "ext4")

        mock_run.assert_called_once_with(
            ["mount", "-o", "loop", "-t", "ext4", "/images/a.img", "/mnt/a"],
            "mount",
        )

    def test_unmount(self, mock_run: MagicMock) -> None:
        SystemImageTools().unmount("/mnt/a")

        mock_run.assert_called_once_with(["umount", "/mnt/a"], "unmount")
